"""nf_builder package initialization.

Public API surface:
 - expand / expand_records: split a delimited field into one row per item (1NF)
 - decompose / reconstruct: move a partial dependency out of order details (2NF)
 - normalize_product_details / normalize_order_details: CSV-to-CSV drivers
"""
from .decomposition import decompose, reconstruct
from .expansion import expand, expand_records
from .normalization import normalize_order_details, normalize_product_details

__all__ = [
    "expand",
    "expand_records",
    "decompose",
    "reconstruct",
    "normalize_product_details",
    "normalize_order_details",
]
