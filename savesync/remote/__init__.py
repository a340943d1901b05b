# Savesync Remote Module
# Concrete remote gateways

from savesync.remote.graphql import GraphQLGateway

__all__ = [
    "GraphQLGateway",
]
