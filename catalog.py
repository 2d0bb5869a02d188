"""Static product tables: where the result image goes on each product template,
and which Printful variant renders each product. Keys are product names as sent
by the frontend."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict


@dataclass(frozen=True)
class Placement:
    """Box on the base image (pixels) the overlay is stretched into"""
    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class ProviderVariant:
    variant_id: int
    area_width: int = 300
    area_height: int = 300
    area_left: int = 100
    area_top: int = 150

    def position(self) -> Dict[str, int]:
        return {
            "area_width": self.area_width,
            "area_height": self.area_height,
            "area_left": self.area_left,
            "area_top": self.area_top,
        }


PLACEMENTS = MappingProxyType({
    "T-Shirt": Placement(left=150, top=120, width=300, height=350),
    "Mug": Placement(left=100, top=150, width=300, height=300),
})

PROVIDER_VARIANTS = MappingProxyType({
    "T-Shirt": ProviderVariant(variant_id=4011),
    "Mug": ProviderVariant(variant_id=3011),
})
