"""Card data model shared by every provider."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CardFace:
    """One face of a double-faced, split or adventure card."""

    name: str
    mana_cost: Optional[str] = None
    type_line: Optional[str] = None
    oracle_text: Optional[str] = None
    power: Optional[str] = None
    toughness: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CardFace":
        return cls(
            name=data.get("name", ""),
            mana_cost=data.get("mana_cost") or None,
            type_line=data.get("type_line") or None,
            oracle_text=data.get("oracle_text") or None,
            power=data.get("power"),
            toughness=data.get("toughness"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "mana_cost": self.mana_cost,
            "type_line": self.type_line,
            "oracle_text": self.oracle_text,
            "power": self.power,
            "toughness": self.toughness,
        }


@dataclass
class Card:
    """
    Normalized card record.

    Multi-faced cards keep their rules text on the faces, so rules checks
    go through all_oracle_text() and all_type_lines().
    """

    id: str
    name: str
    mana_cost: Optional[str] = None
    cmc: float = 0.0
    type_line: str = ""
    oracle_text: Optional[str] = None
    power: Optional[str] = None
    toughness: Optional[str] = None
    colors: list[str] = field(default_factory=list)
    color_identity: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    set_code: str = ""
    set_name: str = ""
    rarity: str = ""
    prices: dict[str, Optional[str]] = field(default_factory=dict)
    image_uri: Optional[str] = None
    card_faces: list[CardFace] = field(default_factory=list)
    layout: str = "normal"

    def all_oracle_text(self) -> str:
        """Main oracle text plus every face's text, space-joined."""
        parts = [self.oracle_text] if self.oracle_text else []
        parts.extend(face.oracle_text for face in self.card_faces if face.oracle_text)
        return " ".join(parts)

    def all_type_lines(self) -> str:
        """Main type line plus every face's type line, space-joined."""
        parts = [self.type_line] if self.type_line else []
        parts.extend(face.type_line for face in self.card_faces if face.type_line)
        return " ".join(parts)

    def is_land(self) -> bool:
        return "land" in self.type_line.lower()

    def is_creature(self) -> bool:
        return "creature" in self.type_line.lower()

    def display(self) -> str:
        """Short one-line description for terminal output."""
        cost = f" {self.mana_cost}" if self.mana_cost else ""
        return f"{self.name}{cost} - {self.type_line}"

    @classmethod
    def from_scryfall(cls, data: dict) -> "Card":
        """Create a Card from a Scryfall card object (or a cached to_dict())."""
        faces = [CardFace.from_dict(f) for f in data.get("card_faces", []) or []]

        image_uri = None
        image_uris = data.get("image_uris") or {}
        if image_uris:
            image_uri = image_uris.get("normal")
        elif faces and data.get("card_faces", [{}])[0].get("image_uris"):
            image_uri = data["card_faces"][0]["image_uris"].get("normal")

        return cls(
            id=data.get("id", ""),
            name=data.get("name", "Unknown"),
            mana_cost=data.get("mana_cost") or None,
            cmc=float(data.get("cmc", 0.0) or 0.0),
            type_line=data.get("type_line", "") or "",
            oracle_text=data.get("oracle_text") or None,
            power=data.get("power"),
            toughness=data.get("toughness"),
            colors=list(data.get("colors", []) or []),
            color_identity=list(data.get("color_identity", []) or []),
            keywords=list(data.get("keywords", []) or []),
            set_code=data.get("set", "") or "",
            set_name=data.get("set_name", "") or "",
            rarity=data.get("rarity", "") or "",
            prices=dict(data.get("prices", {}) or {}),
            image_uri=image_uri,
            card_faces=faces,
            layout=data.get("layout", "normal") or "normal",
        )

    @classmethod
    def from_mtgio(cls, data: dict) -> "Card":
        """Create a Card from a magicthegathering.io card object."""
        subtypes = data.get("subtypes") or []
        type_line = data.get("type", "") or ""
        if not type_line:
            supertypes = data.get("supertypes") or []
            types = data.get("types") or []
            type_line = " ".join(supertypes + types)
            if subtypes:
                type_line += " — " + " ".join(subtypes)

        return cls(
            id=data.get("id", ""),
            name=data.get("name", "Unknown"),
            mana_cost=data.get("manaCost") or None,
            cmc=float(data.get("cmc", 0.0) or 0.0),
            type_line=type_line,
            oracle_text=data.get("text") or None,
            power=data.get("power"),
            toughness=data.get("toughness"),
            colors=_mtgio_colors(data.get("colors") or []),
            color_identity=list(data.get("colorIdentity") or []),
            set_code=(data.get("set") or "").lower(),
            set_name=data.get("setName", "") or "",
            rarity=(data.get("rarity") or "").lower(),
            image_uri=data.get("imageUrl"),
            layout=data.get("layout", "normal") or "normal",
        )

    def to_dict(self) -> dict[str, Any]:
        """Scryfall-shaped dict; from_scryfall() reads it back."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "mana_cost": self.mana_cost,
            "cmc": self.cmc,
            "type_line": self.type_line,
            "oracle_text": self.oracle_text,
            "power": self.power,
            "toughness": self.toughness,
            "colors": self.colors,
            "color_identity": self.color_identity,
            "keywords": self.keywords,
            "set": self.set_code,
            "set_name": self.set_name,
            "rarity": self.rarity,
            "prices": self.prices,
            "layout": self.layout,
        }
        if self.image_uri:
            data["image_uris"] = {"normal": self.image_uri}
        if self.card_faces:
            data["card_faces"] = [face.to_dict() for face in self.card_faces]
        return data


_MTGIO_COLOR_NAMES = {
    "white": "W",
    "blue": "U",
    "black": "B",
    "red": "R",
    "green": "G",
}


def _mtgio_colors(names: list[str]) -> list[str]:
    """MTG.io reports colors by name; convert to letters."""
    return [_MTGIO_COLOR_NAMES[n.lower()] for n in names if n.lower() in _MTGIO_COLOR_NAMES]
