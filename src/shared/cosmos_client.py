# Standardized Cosmos DB client implementation

import os
import logging
from functools import lru_cache
from azure.cosmos import CosmosClient, exceptions
from azure.cosmos.container import ContainerProxy
from src.specs.common.errors import ConfigurationError, StoreError

DEFAULT_PROJECTS_CONTAINER = "projects"


class CosmosDBClient:
    # Requests are not retried; failures surface to the caller
    MAX_RETRIES = 0
    OPERATION_TIMEOUT = 10  # seconds

    def __init__(self):
        """Initialize the Cosmos DB client with connection settings"""
        self.connection_string = os.environ.get("COSMOS_DB_CONNECTION_STRING")
        self.database_name = os.environ.get("COSMOS_DB_NAME")

        if not self.connection_string or not self.database_name:
            raise ConfigurationError("Missing Cosmos DB connection string or database name")

        self.client = CosmosClient.from_connection_string(
            self.connection_string,
            retry_total=self.MAX_RETRIES,
            connection_timeout=self.OPERATION_TIMEOUT,
        )
        self.database = self.client.get_database_client(self.database_name)

    def get_container(self, container_name: str) -> ContainerProxy:
        """
        Get a container by name with environment variable override

        Args:
            container_name: Base name of the container

        Returns:
            ContainerProxy for the container

        Raises:
            StoreError: If the container client cannot be created
        """
        env_container_name = os.environ.get(f"COSMOS_DB_CONTAINER_{container_name.upper()}")
        actual_name = env_container_name or container_name
        try:
            return self.database.get_container_client(actual_name)
        except exceptions.CosmosHttpResponseError as e:
            logging.error(f"Error getting container '{actual_name}': {e}")
            raise StoreError(f"Could not open container '{actual_name}'") from e


def cosmos_configured() -> bool:
    return bool(os.environ.get("COSMOS_DB_CONNECTION_STRING") and os.environ.get("COSMOS_DB_NAME"))


# Singleton instance with caching
@lru_cache(maxsize=1)
def get_cosmos_client() -> CosmosDBClient:
    """Get or create the singleton CosmosDBClient instance"""
    return CosmosDBClient()

def get_cosmos_container(container_name: str = DEFAULT_PROJECTS_CONTAINER) -> ContainerProxy:
    """
    Get a container by name (convenience function using singleton client)

    Args:
        container_name: Name of the container to get

    Returns:
        The container proxy
    """
    return get_cosmos_client().get_container(container_name)
