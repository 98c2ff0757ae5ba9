"""Base interface for AWS data sources."""

from abc import ABC, abstractmethod


class AWSDataSource(ABC):
    """Base class for AWS-specific data sources."""

    def __init__(self, config=None, client=None):
        """Initialize AWS data source.

        Args:
            config: AWSConfig used to build the service client on first use
            client: Pre-built boto3 client (takes precedence over config)
        """
        self.config = config
        self._client = client

    @abstractmethod
    def get_client(self):
        """Get the appropriate AWS service client."""
        pass
