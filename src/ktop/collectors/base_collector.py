# src/ktop/collectors/base_collector.py
"""
This module defines the abstract base class for the cluster collectors.
Both collectors lazily acquire their API clients and must release them
through close() at the end of a report.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """
    Abstract Base Class for all collectors.
    """

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        Fetch data from the Kubernetes API and return it as Pydantic models.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close API clients).
        """
        pass
