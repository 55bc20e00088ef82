"""The indicator catalogue."""

from datetime import date

from riskdash.core.exceptions import UnknownIndicatorError
from riskdash.core.indicators.base import (
    ALL_PERIODS,
    FINITE_PERIODS,
    SHORT_PERIODS,
    ExtraSpec,
    IndicatorSpec,
    InputRole,
    InputSpec,
)
from riskdash.core.models import Period
from riskdash.core.pipeline.transforms import (
    difference,
    earnings_yield_gap,
    percent_of,
    ratio,
    scaled,
)

FRED = "fred"
CBOE = "cboe"
STATE_STREET = "statestreet"
MULTPL = "multpl"
ACCUMULATED = "accumulated"

TED_DISCONTINUED = date(2022, 1, 31)

VIX_TERM_STRUCTURE = IndicatorSpec(
    name="vix-term-structure",
    title="VIX Term Structure",
    description="3-month VIX minus spot VIX; negative slope signals backwardation.",
    inputs=(
        InputSpec("vix", FRED, "VIXCLS"),
        InputSpec("vix3m", FRED, "VXVCLS"),
    ),
    value_field="slope",
    transform=difference("vix", "vix3m"),
    periods=ALL_PERIODS,
    earliest=date(2008, 1, 1),
)

HY_SPREAD = IndicatorSpec(
    name="hy-spread",
    title="High Yield Credit Spread",
    description="ICE BofA US High Yield option-adjusted spread, in basis points.",
    inputs=(InputSpec("spread", FRED, "BAMLH0A0HYM2", display=False),),
    value_field="spread",
    transform=scaled("spread", 100.0),
    decimals=0,
    periods=FINITE_PERIODS,
)

HY_IG_RATIO = IndicatorSpec(
    name="hy-ig-ratio",
    title="HY / IG Spread Ratio",
    description="High yield spread divided by investment grade spread.",
    inputs=(
        InputSpec("hySpread", FRED, "BAMLH0A0HYM2", scale=100.0, decimals=0),
        InputSpec("igSpread", FRED, "BAMLC0A0CM", scale=100.0, decimals=0),
    ),
    value_field="ratio",
    transform=ratio("hySpread", "igSpread"),
    periods=FINITE_PERIODS,
)

TED_SPREAD = IndicatorSpec(
    name="ted-spread",
    title="TED Spread",
    description="3-month LIBOR minus 3-month T-bill, in basis points. Discontinued in January 2022.",
    inputs=(InputSpec("spread", FRED, "TEDRATE", display=False),),
    value_field="spread",
    transform=scaled("spread", 100.0),
    decimals=0,
    periods=ALL_PERIODS,
    earliest=date(1986, 1, 1),
    series_end=TED_DISCONTINUED,
)

SOFR_SPREAD = IndicatorSpec(
    name="sofr-spread",
    title="SOFR - T-Bill Spread",
    description="90-day average SOFR minus the 3-month T-bill rate, in basis points.",
    inputs=(
        InputSpec("sofr90", FRED, "SOFR90DAYAVG"),
        InputSpec("tbill3m", FRED, "DTB3"),
    ),
    value_field="spread",
    transform=difference("tbill3m", "sofr90", 100.0),
    decimals=0,
    periods=SHORT_PERIODS,
    earliest=date(2020, 1, 1),
)

YIELD_CURVE = IndicatorSpec(
    name="yield-curve",
    title="10Y - 3M Yield Curve",
    description="10-year minus 3-month Treasury constant maturity yield.",
    inputs=(
        InputSpec("dgs10", FRED, "DGS10"),
        InputSpec("dgs3mo", FRED, "DGS3MO"),
    ),
    value_field="slope",
    transform=difference("dgs3mo", "dgs10"),
    periods=SHORT_PERIODS,
    earliest=date(2000, 1, 1),
)

NFCI = IndicatorSpec(
    name="nfci",
    title="Chicago Fed National Financial Conditions Index",
    description="Weekly index; positive values indicate tighter than average conditions.",
    inputs=(InputSpec("nfci", FRED, "NFCI", display=False),),
    value_field="nfci",
    transform=scaled("nfci"),
    window=52,
    observations_per_year=50,
    decimals=4,
    periods=ALL_PERIODS,
    earliest=date(1971, 1, 1),
)

JNK_PREMIUM = IndicatorSpec(
    name="jnk-premium",
    title="JNK Premium / Discount to NAV",
    description="SPDR Bloomberg High Yield Bond ETF market price premium over NAV, in percent.",
    inputs=(
        InputSpec("premium", STATE_STREET, "pdhist-jnk", display=False),
        InputSpec("nav", STATE_STREET, "navhist-jnk", role=InputRole.EXACT),
    ),
    value_field="premium",
    transform=scaled("premium", 100.0),
    periods=SHORT_PERIODS,
    earliest=date(2010, 1, 1),
)

ERP_PROXY = IndicatorSpec(
    name="erp-proxy",
    title="Equity Risk Premium Proxy",
    description="S&P 500 trailing earnings yield minus the 10-year real Treasury yield.",
    inputs=(
        InputSpec("sp500", FRED, "SP500"),
        InputSpec("realYield", FRED, "DFII10"),
        InputSpec("epsTtm", MULTPL, "sp500-eps", role=InputRole.SOFT),
    ),
    value_field="erpProxy",
    transform=earnings_yield_gap("epsTtm", "sp500", "realYield"),
    extras=(ExtraSpec("earningsYield", percent_of("epsTtm", "sp500")),),
    periods=ALL_PERIODS,
    earliest=date(2000, 1, 1),
)

PUTCALL_RATIO = IndicatorSpec(
    name="putcall-ratio",
    title="CBOE Index Put/Call Ratio",
    description="Index option put volume over call volume, with the equity-only ratio for reference.",
    inputs=(
        InputSpec("calls", CBOE, "indexpc", source_field="CALL", decimals=0),
        InputSpec("puts", CBOE, "indexpc", source_field="PUT", decimals=0),
        InputSpec("equityRatio", CBOE, "equitypc", source_field="P/C Ratio"),
    ),
    value_field="indexRatio",
    transform=ratio("puts", "calls"),
    periods=ALL_PERIODS,
    earliest=date(2006, 11, 1),
)

SPX_PUTCALL = IndicatorSpec(
    name="spx-putcall",
    title="SPX Put/Call Ratio",
    description="S&P 500 index option put/call ratio accumulated from daily scrapes.",
    inputs=(InputSpec("ratio", ACCUMULATED, "spx-putcall", display=False),),
    value_field="ratio",
    transform=scaled("ratio"),
    periods=(Period.MAX,),
    default_period=Period.MAX,
    earliest=date(1995, 1, 1),
)

INDICATORS: tuple[IndicatorSpec, ...] = (
    VIX_TERM_STRUCTURE,
    HY_SPREAD,
    HY_IG_RATIO,
    TED_SPREAD,
    SOFR_SPREAD,
    YIELD_CURVE,
    NFCI,
    JNK_PREMIUM,
    ERP_PROXY,
    PUTCALL_RATIO,
    SPX_PUTCALL,
)

_BY_NAME = {spec.name: spec for spec in INDICATORS}


def list_indicators() -> list[IndicatorSpec]:
    """Return the catalogue in declaration order."""
    return list(INDICATORS)


def indicator_names() -> list[str]:
    return [spec.name for spec in INDICATORS]


def get_indicator(name: str) -> IndicatorSpec:
    """Look up an indicator by name.

    Raises:
        UnknownIndicatorError: if ``name`` is not in the catalogue
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownIndicatorError(name, indicator_names()) from None
