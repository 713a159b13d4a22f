"""Utility functions for the Wasteland game system."""

from wasteland.utils.hex_math import (
    HexCoord,
    decode_coord,
    encode_coord,
    hex_distance,
    hex_neighbors,
    hexes_in_range,
)
from wasteland.utils.rng import LcgStream, generate_seed, make_rng

__all__ = [
    "HexCoord",
    "LcgStream",
    "decode_coord",
    "encode_coord",
    "generate_seed",
    "hex_distance",
    "hex_neighbors",
    "hexes_in_range",
    "make_rng",
]
