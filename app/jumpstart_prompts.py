# ================================
# FILE: app/jumpstart_prompts.py
# ================================
"""Fixed prompt lists for the three jumpstart modes."""
from dataclasses import dataclass, field

from app.errors import ValidationError


@dataclass(frozen=True)
class Prompt:
    id: str
    item: str
    rationale: str
    location_hint: str
    typical_value: str


@dataclass(frozen=True)
class JumpstartMode:
    id: str
    name: str
    description: str
    time: str
    value: str
    prompts: tuple[Prompt, ...] = field(default_factory=tuple)
    popular: bool = False

    @property
    def items(self) -> int:
        # target is the prompt count, never set separately
        return len(self.prompts)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "time": self.time,
            "items": self.items,
            "value": self.value,
            "popular": self.popular,
            "prompts": [prompt_dict(p) for p in self.prompts],
        }


def prompt_dict(p: Prompt) -> dict:
    return {
        "id": p.id,
        "item": p.item,
        "rationale": p.rationale,
        "location_hint": p.location_hint,
        "typical_value": p.typical_value,
    }


QUICK_WIN_PROMPTS = (
    Prompt("quick-win-tv", "TV", "Your most valuable living room item",
           "Living room, entertainment center, media console", "$500-2,000"),
    Prompt("quick-win-laptop", "Laptop", "Often your highest-value personal item",
           "Desk, home office, bedroom", "$800-2,500"),
    Prompt("quick-win-jewelry", "Jewelry", "Frequently forgotten in insurance claims",
           "Bedroom dresser, jewelry box, safe", "$500-5,000"),
)

HIGH_VALUE_PROMPTS = (
    Prompt("high-value-electronics", "Most Expensive Electronic", "Maximize your insurance protection",
           "Home office, living room", "$1,000-3,000"),
    Prompt("high-value-appliances", "Major Appliance", "High-value items that add up",
           "Kitchen, laundry room", "$500-2,000"),
    Prompt("high-value-tools", "Power Tools or Equipment", "Often overlooked but valuable",
           "Garage, basement, workshop", "$200-1,500"),
    Prompt("high-value-audio", "Audio/Video Equipment", "Specialized items need documentation",
           "Entertainment center, music room", "$300-2,000"),
    Prompt("high-value-designer", "Designer Items or Collectibles", "High-value personal items",
           "Closet, display cabinets", "$500-10,000"),
)

ROOM_BLITZ_PROMPTS = (
    Prompt("room-blitz-bed", "Bed Frame & Mattress", "Foundation of your bedroom",
           "Center of bedroom", "$500-2,000"),
    Prompt("room-blitz-nightstands", "Nightstands", "Functional bedroom furniture",
           "Beside the bed", "$100-500"),
    Prompt("room-blitz-dresser", "Dresser", "Storage furniture adds up",
           "Against the wall", "$200-1,000"),
    Prompt("room-blitz-tv", "Bedroom TV", "Entertainment electronics",
           "Wall-mounted or on dresser", "$300-1,500"),
    Prompt("room-blitz-laptop", "Laptop or Tablet", "Personal electronics",
           "Desk, nightstand, bed", "$500-2,000"),
    Prompt("room-blitz-phone", "Smartphone", "Valuable personal device",
           "Nightstand, desk", "$500-1,200"),
    Prompt("room-blitz-jewelry", "Jewelry Collection", "High-value personal items",
           "Jewelry box, dresser", "$500-5,000"),
    Prompt("room-blitz-watch", "Watches", "Often overlooked valuables",
           "Watch box, nightstand", "$200-5,000"),
    Prompt("room-blitz-shoes", "Designer Shoes", "Expensive footwear collection",
           "Closet, shoe rack", "$100-1,000"),
    Prompt("room-blitz-clothing", "Designer Clothing", "High-value wardrobe items",
           "Closet, wardrobe", "$200-2,000"),
    Prompt("room-blitz-bags", "Handbags & Accessories", "Luxury accessories",
           "Closet shelves", "$300-3,000"),
    Prompt("room-blitz-mirror", "Full-Length Mirror", "Decorative furniture",
           "Closet door, wall", "$50-300"),
    Prompt("room-blitz-lamp", "Bedside Lamps", "Lighting fixtures",
           "Nightstands", "$50-300"),
    Prompt("room-blitz-art", "Artwork or Decor", "Decorative pieces have value",
           "Walls, shelves", "$100-2,000"),
    Prompt("room-blitz-gaming", "Gaming Console", "Entertainment devices",
           "TV stand, desk", "$300-600"),
)

JUMPSTART_MODES = (
    JumpstartMode("quick-win", "Quick Win", "Perfect for getting started", "3 minutes",
                  "$2,000-5,000", QUICK_WIN_PROMPTS, popular=True),
    JumpstartMode("high-value", "High-Value Hunt", "Focus on expensive items", "5 minutes",
                  "$5,000-15,000", HIGH_VALUE_PROMPTS),
    JumpstartMode("room-blitz", "Room Blitz", "Complete one room", "10 minutes",
                  "$10,000-30,000", ROOM_BLITZ_PROMPTS),
)

_MODES_BY_ID = {m.id: m for m in JUMPSTART_MODES}


def get_mode(mode_id: str) -> JumpstartMode:
    mode = _MODES_BY_ID.get((mode_id or "").strip())
    if mode is None:
        raise ValidationError(f"Unknown jumpstart mode {mode_id!r}; expected one of {sorted(_MODES_BY_ID)}")
    return mode
