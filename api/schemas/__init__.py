from .responses import EndpointDescription, IndexResponse

__all__ = ['EndpointDescription', 'IndexResponse']
