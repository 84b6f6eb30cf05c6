"""Places-of-interest adapters."""

from tripmap.adapters.places import mock as mock_places
from tripmap.adapters.places import real as real_places

__all__ = ["mock_places", "real_places"]
