"""Graphic Field models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, computed_field


class GraphicType(StrEnum):
    """Supported ^GF data formats."""

    ASCII = "ascii"  # Hex digits, one row per line
    BINARY = "binary"  # Raw row bytes
    COMPRESSED_ASCII = "compressed_ascii"  # Hex digits with ZPL run-length compression

    @property
    def letter(self) -> str:
        """Format letter used in the ^GF header."""
        if self is GraphicType.BINARY:
            return "B"
        return "A"

    @classmethod
    def parse(cls, value: "str | GraphicType") -> "GraphicType":
        """Parse a graphic type name.

        Accepts the enum values ("compressed_ascii") as well as the
        CamelCase names used by other ZPL tools ("CompressedASCII").
        Matching is case-insensitive.

        Raises:
            ValueError: If the name is not a known graphic type.
        """
        if isinstance(value, GraphicType):
            return value
        key = value.strip().lower().replace("-", "_")
        aliases = {
            "compressedascii": cls.COMPRESSED_ASCII,
            "compressed": cls.COMPRESSED_ASCII,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown graphic type: {value}") from None


class GraphicField(BaseModel):
    """An encoded ^GF record."""

    model_config = ConfigDict(frozen=True)

    graphic_type: GraphicType
    body: bytes
    row_bytes: int
    total_bytes: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def byte_count(self) -> int:
        """Length of the encoded body as it is sent to the printer."""
        return len(self.body)

    @property
    def header(self) -> str:
        """The ^GF command header, including the trailing newline."""
        return f"^GF{self.graphic_type.letter},{self.byte_count},{self.total_bytes},{self.row_bytes},\n"

    def to_bytes(self) -> bytes:
        """Return the header followed by the body."""
        return self.header.encode("ascii") + self.body
