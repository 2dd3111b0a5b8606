# src/ktop/models/node.py

from pydantic import BaseModel, ConfigDict, Field


class NodeResourceSnapshot(BaseModel):
    """
    Capacity and allocatable resources of one node, as listed by the API server.

    Attributes:
        name: Node name
        cpu_capacity: CPU capacity in millicores
        cpu_allocatable: CPU allocatable to pods in millicores
        memory_capacity: Memory capacity in bytes
        memory_allocatable: Memory allocatable to pods in bytes
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    cpu_capacity: int = Field(0, ge=0, description="CPU capacity in millicores")
    cpu_allocatable: int = Field(0, ge=0, description="CPU allocatable in millicores")
    memory_capacity: int = Field(0, ge=0, description="Memory capacity in bytes")
    memory_allocatable: int = Field(0, ge=0, description="Memory allocatable in bytes")
