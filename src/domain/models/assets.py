"""Asset references, descriptors and denominators.

AssetRef and DenominatorSpec are separate tagged unions so an asset code can
never be mistaken for a denominator code.  A ratio denominator wraps an
AssetRef and has no real/nominal flag of its own: ratios always divide by
the denominator's real value.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import BuiltinAsset, NativeForm

_TICKER_RE = re.compile(r"^[A-Z0-9.\-^=]{1,15}$")


class BuiltinAssetRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["builtin"] = "builtin"
    asset: BuiltinAsset


class TickerAssetRef(BaseModel):
    """A custom ticker registered during the session (e.g. "SPY", "BRK.B")."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ticker"] = "ticker"
    symbol: str

    @field_validator("symbol")
    @classmethod
    def _normalise_symbol(cls, value: str) -> str:
        symbol = value.strip().upper()
        if not _TICKER_RE.match(symbol):
            raise ValueError(f"invalid ticker symbol: {value!r}")
        return symbol


AssetRef = Annotated[Union[BuiltinAssetRef, TickerAssetRef], Field(discriminator="kind")]


def builtin(asset: BuiltinAsset) -> BuiltinAssetRef:
    return BuiltinAssetRef(asset=asset)


def ticker(symbol: str) -> TickerAssetRef:
    return TickerAssetRef(symbol=symbol)


CAPE = builtin(BuiltinAsset.CAPE)
HOME = builtin(BuiltinAsset.HOME)
SP500 = builtin(BuiltinAsset.SP500)
GOLD = builtin(BuiltinAsset.GOLD)
BITCOIN = builtin(BuiltinAsset.BITCOIN)


class AssetDescriptor(BaseModel):
    """What the valuation engine needs to know about an asset's series.

    value_field names the Observation attribute holding the raw price/level.
    bounded_history marks assets that did not exist (or whose series is
    truncated) before their first observation; lookups into them refuse
    targets that precede the series start by more than the inception
    tolerance.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    value_field: str
    native_form: NativeForm
    bounded_history: bool = False


_BUILTIN_DESCRIPTORS: dict[BuiltinAsset, AssetDescriptor] = {
    BuiltinAsset.CAPE: AssetDescriptor(
        label="CAPE", value_field="cape", native_form=NativeForm.DIMENSIONLESS
    ),
    BuiltinAsset.HOME: AssetDescriptor(
        label="Home Price", value_field="real_price", native_form=NativeForm.REAL
    ),
    BuiltinAsset.SP500: AssetDescriptor(
        label="S&P 500", value_field="sp500", native_form=NativeForm.REAL
    ),
    BuiltinAsset.GOLD: AssetDescriptor(
        label="Gold", value_field="price", native_form=NativeForm.NOMINAL
    ),
    BuiltinAsset.BITCOIN: AssetDescriptor(
        label="Bitcoin",
        value_field="price",
        native_form=NativeForm.NOMINAL,
        bounded_history=True,
    ),
}


def describe(asset: BuiltinAssetRef | TickerAssetRef) -> AssetDescriptor:
    """Return the descriptor for a built-in asset or a custom ticker."""
    if isinstance(asset, BuiltinAssetRef):
        return _BUILTIN_DESCRIPTORS[asset.asset]
    return AssetDescriptor(
        label=asset.symbol,
        value_field="price",
        native_form=NativeForm.NOMINAL,
        bounded_history=True,
    )


# ─────────────────────────────────────────────────────────────────────────── #
# Denominators                                                                 #
# ─────────────────────────────────────────────────────────────────────────── #


class NominalDenominator(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["nominal"] = "nominal"


class RealDenominator(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["real"] = "real"


class RatioDenominator(BaseModel):
    """Express the asset as a multiple of another asset's real price."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ratio"] = "ratio"
    asset: AssetRef


DenominatorSpec = Annotated[
    Union[NominalDenominator, RealDenominator, RatioDenominator],
    Field(discriminator="kind"),
]

NOMINAL = NominalDenominator()
REAL = RealDenominator()


def ratio_to(asset: BuiltinAssetRef | TickerAssetRef) -> RatioDenominator:
    return RatioDenominator(asset=asset)


def denominator_label(denominator: NominalDenominator | RealDenominator | RatioDenominator) -> str:
    """Human-readable unit, e.g. "Nominal USD", "Real USD" or "Gold"."""
    if isinstance(denominator, NominalDenominator):
        return "Nominal USD"
    if isinstance(denominator, RealDenominator):
        return "Real USD"
    return describe(denominator.asset).label
