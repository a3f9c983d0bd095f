"""Infrastructure layer for the media manager."""

from . import serialization
from . import repositories
