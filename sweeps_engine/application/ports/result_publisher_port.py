"""Result publisher port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class ResultPublisherPort(ABC):
    """Port for publishing settled results to external consumers"""

    @abstractmethod
    def publish_result(self, result_data: Dict[str, Any], trace_headers: Dict[str, str]) -> None:
        """Publish a settled result for analytics"""
        pass
