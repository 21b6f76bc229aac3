"""
Tidal constituent records and standard astronomical speeds.

A constituent is identified by its name and advances in phase at a fixed
speed (degrees per hour) that is the same for every station and every
year.  Speeds for the NOS standard 37 constituents are from Schureman
(1958) Special Publication No. 98, Table 2.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Constituent:
    """A named periodic tide component and its speed in degrees/hour."""

    name: str
    speed: float

    def __post_init__(self):
        if not self.name:
            raise ValueError('Constituent name must be a non-empty string.')
        if not math.isfinite(self.speed) or self.speed < 0.0:
            raise ValueError(
                f"Constituent {self.name} has invalid speed {self.speed!r}."
            )

    @property
    def period_hours(self) -> float:
        """Period of one full cycle in hours (``inf`` for a zero speed)."""
        if self.speed == 0.0:
            return math.inf
        return 360.0 / self.speed


# ---------------------------------------------------------------------------
# NOS standard constituents (Appendix C order of NOS CS 24) and speeds.
# ---------------------------------------------------------------------------

NOS_37_CONSTITUENTS: list[str] = [
    # Semidiurnal
    'M2', 'S2', 'N2', 'K2', '2N2', 'MU2', 'NU2', 'L2', 'T2', 'R2', 'LDA2',
    # Diurnal
    'K1', 'O1', 'P1', 'Q1', 'J1', 'M1', 'OO1', '2Q1', 'RHO1',
    # Long-period
    'MF', 'MM', 'SSA', 'SA', 'MSM', 'MSF',
    # Shallow-water / overtides
    'M4', 'M6', 'M8', 'MS4', 'MN4', 'MK3', 'S4', 'S6', '2MK3', '2SM2', 'MO3',
]

CONSTITUENT_SPEEDS: dict[str, float] = {
    'M2':   28.9841042,
    'S2':   30.0000000,
    'N2':   28.4397295,
    'K2':   30.0821373,
    '2N2':  27.8953548,
    'MU2':  27.9682084,
    'NU2':  28.5125831,
    'L2':   29.5284789,
    'T2':   29.9589333,
    'R2':   30.0410667,
    'LDA2': 29.4556253,
    'K1':   15.0410686,
    'O1':   13.9430356,
    'P1':   14.9589314,
    'Q1':   13.3986609,
    'J1':   15.5854433,
    'M1':   14.4966939,
    'OO1':  16.1391017,
    '2Q1':  12.8542862,
    'RHO1': 13.4715145,
    'MF':    1.0980331,
    'MM':    0.5443747,
    'SSA':   0.0821373,
    'SA':    0.0410686,
    'MSM':   0.4715211,
    'MSF':   1.0158958,
    'M4':   57.9682084,
    'M6':   86.9523127,
    'M8':  115.9364169,
    'MS4':  58.9841042,
    'MN4':  57.4238337,
    'MK3':  44.0251729,
    'S4':   60.0000000,
    'S6':   90.0000000,
    '2MK3': 42.9271398,
    '2SM2': 31.0158958,
    'MO3':  42.9271398,
}
"""Angular speeds (degrees/hour) for the 37 NOS standard constituents."""

# Names seen in harmonics files and the CO-OPS API that differ from the
# NOS spelling.
_NAME_ALIASES: dict[str, str] = {
    'LAM2': 'LDA2',
    'LAMBDA2': 'LDA2',
    'RHO': 'RHO1',
}


def normalize_constituent_name(name: str) -> str:
    """
    Normalize a constituent name to NOS convention.

    Parameters
    ----------
    name : str
        Constituent name as found in a harmonics source.

    Returns
    -------
    str
        Upper-cased name with known aliases (``LAM2``, ``RHO``) mapped to
        their NOS spelling.  Unknown names are returned upper-cased.
    """
    cleaned = name.strip().upper()
    return _NAME_ALIASES.get(cleaned, cleaned)


def standard_speed(name: str) -> float:
    """
    Return the Schureman speed (degrees/hour) of a standard constituent.

    Raises
    ------
    KeyError
        If *name* is not one of the NOS standard constituents.
    """
    key = normalize_constituent_name(name)
    if key not in CONSTITUENT_SPEEDS:
        raise KeyError(f"No standard speed for constituent '{name}'.")
    return CONSTITUENT_SPEEDS[key]
