from safeshortener.services.mapping_service import MappingService
from safeshortener.services.sweeper import ExpirySweeper


__all__ = [
    'MappingService',
    'ExpirySweeper',
]
