"""
Filter Register File - Bitfield decoding of the four filter registers

Every register write is described by an explicit table of RegisterField
entries (byte mask, byte shift, field shift) so the wire format can be read
and tested independently of the coefficient math.

Register map (offsets as seen on the chip bus):
    0x15 FC_LO     bits 0-2 -> fc bits 0-2
    0x16 FC_HI     bits 0-7 -> fc bits 3-10
    0x17 RES_FILT  bits 4-7 -> res, bit 3 -> filtex, bits 0-2 -> filt3_filt2_filt1
    0x18 MODE_VOL  bit 7 -> voice3off, bits 4-6 -> hp_bp_lp, bits 0-3 -> vol
"""

from typing import Dict, Tuple

REG_FC_LO = 0x15
REG_FC_HI = 0x16
REG_RES_FILT = 0x17
REG_MODE_VOL = 0x18

# hp_bp_lp bits
MODE_LP = 0x01
MODE_BP = 0x02
MODE_HP = 0x04

# filt3_filt2_filt1 bits
FILT_V1 = 0x01
FILT_V2 = 0x02
FILT_V3 = 0x04

FILTEX = 0x08
VOICE3OFF = 0x80


class RegisterField:
    """
    Specification for one bitfield carried by a register write.

    The field's bits (byte >> byte_shift) & mask are stored at
    field_shift within the named register-file value; other bits of that
    value are left untouched.
    """

    def __init__(self, name: str, mask: int, byte_shift: int = 0,
                 field_shift: int = 0, description: str = ""):
        """
        Args:
            name: Register-file value the bits land in (e.g. "fc")
            mask: Mask applied after shifting the byte down
            byte_shift: Position of the field's lowest bit in the byte
            field_shift: Position the bits take inside the stored value
            description: Human-readable description
        """
        self.name = name
        self.mask = mask
        self.byte_shift = byte_shift
        self.field_shift = field_shift
        self.description = description

        if mask <= 0 or byte_shift < 0 or field_shift < 0:
            raise ValueError(f"Invalid bitfield for {name}")
        if (mask << byte_shift) > 0xff:
            raise ValueError(f"Field {name} does not fit in a byte")

    @property
    def stored_mask(self) -> int:
        """Bits of the stored value owned by this field"""
        return self.mask << self.field_shift

    def apply(self, current: int, byte: int) -> int:
        """Merge the field's bits from byte into current."""
        bits = ((byte >> self.byte_shift) & self.mask) << self.field_shift
        return (current & ~self.stored_mask) | bits

    def extract(self, current: int) -> int:
        """Reconstruct the field's byte bits from a stored value."""
        return ((current >> self.field_shift) & self.mask) << self.byte_shift

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "mask": self.mask,
            "byte_shift": self.byte_shift,
            "field_shift": self.field_shift,
            "description": self.description,
        }

    def __repr__(self) -> str:
        return (f"RegisterField({self.name!r}, mask=0x{self.mask:02x}, "
                f"byte_shift={self.byte_shift}, field_shift={self.field_shift})")


FIELD_TABLE: Dict[int, Tuple[RegisterField, ...]] = {
    REG_FC_LO: (
        RegisterField("fc", 0x07, 0, 0, "Cutoff code bits 0-2"),
    ),
    REG_FC_HI: (
        RegisterField("fc", 0xff, 0, 3, "Cutoff code bits 3-10"),
    ),
    REG_RES_FILT: (
        RegisterField("res", 0x0f, 4, 0, "Resonance"),
        # filtex is kept as the raw bit 3 value
        RegisterField("filtex", 0x01, 3, 3, "Route external input through filter"),
        RegisterField("filt3_filt2_filt1", 0x07, 0, 0, "Route voices 1-3 through filter"),
    ),
    REG_MODE_VOL: (
        # voice3off is kept as the raw bit 7 value
        RegisterField("voice3off", 0x01, 7, 7, "Disconnect voice 3 from the output"),
        RegisterField("hp_bp_lp", 0x07, 4, 0, "Highpass / bandpass / lowpass enable"),
        RegisterField("vol", 0x0f, 0, 0, "Output volume"),
    ),
}

FIELD_NAMES = ("fc", "res", "filtex", "filt3_filt2_filt1", "voice3off", "hp_bp_lp", "vol")


class FilterRegisters:
    """
    Raw filter register state.

    fc is a single 11-bit integer fed by two byte writes; the remaining
    values hold their register bits as decoded by FIELD_TABLE.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Zero every register value."""
        self.fc = 0
        self.res = 0
        self.filtex = 0
        self.filt3_filt2_filt1 = 0
        self.voice3off = 0
        self.hp_bp_lp = 0
        self.vol = 0

    def write(self, offset: int, value: int) -> Tuple[str, ...]:
        """
        Decode a register write.

        Args:
            offset: Register offset (REG_FC_LO .. REG_MODE_VOL)
            value: Written byte; bits outside the fields are ignored

        Returns:
            Names of the register values the write updated

        Raises:
            ValueError: If offset is not a filter register
        """
        fields = FIELD_TABLE.get(offset)
        if fields is None:
            raise ValueError(f"Not a filter register: 0x{offset:02x}")

        value &= 0xff
        for field in fields:
            setattr(self, field.name, field.apply(getattr(self, field.name), value))
        return tuple(field.name for field in fields)

    def read(self, offset: int) -> int:
        """Reconstruct the byte that would reproduce the current state of a register."""
        fields = FIELD_TABLE.get(offset)
        if fields is None:
            raise ValueError(f"Not a filter register: 0x{offset:02x}")

        byte = 0
        for field in fields:
            byte |= field.extract(getattr(self, field.name))
        return byte

    # Flag accessors

    @property
    def filter_external(self) -> bool:
        return bool(self.filtex & FILTEX)

    @property
    def voice3_disconnected(self) -> bool:
        return bool(self.voice3off & VOICE3OFF)

    def voice_filtered(self, voice: int) -> bool:
        """True if voice 0, 1 or 2 is routed through the filter."""
        return bool(self.filt3_filt2_filt1 & (1 << voice))

    @property
    def lowpass(self) -> bool:
        return bool(self.hp_bp_lp & MODE_LP)

    @property
    def bandpass(self) -> bool:
        return bool(self.hp_bp_lp & MODE_BP)

    @property
    def highpass(self) -> bool:
        return bool(self.hp_bp_lp & MODE_HP)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def __repr__(self) -> str:
        field_str = ', '.join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"FilterRegisters({field_str})"
