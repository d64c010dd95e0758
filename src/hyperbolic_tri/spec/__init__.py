"""Constants and mesh contract."""

from .constants import *
from .structures import ccw, cw, canonical_face, validate_mesh, create_mesh, MeshContract
