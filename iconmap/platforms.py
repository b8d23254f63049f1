from pathlib import Path
from typing import List

# Platform identifiers as used by the DefiLlama pools API
DEFAULT_PLATFORMS = [
    "curve-dex",
    "uniswap-v2",
    "fluid-dex",
    "uniswap-v3",
    "raydium-amm",
    "kamino-liquidity",
    "sushiswap",
    "osmosis-dex",
    "orca-dex",
    "joe-v2.1",
    "aerodrome-slipstream",
    "pancakeswap-amm-v3",
    "aerodrome-v1",
    "etherex-cl",
    "cetus-clmm",
    "camelot-v3",
    "camelot-v2",
    "pendle",
    "alien-base-v3",
    "maverick-v2",
    "meridian-amm",
    "shadow-exchange-clmm",
    "flowx-v3",
    "sushiswap-v3",
    "turbos",
    "smardex-amm",
    "pancakeswap-amm",
    "pangolin-v2",
    "yuzu-finance",
    "interest-curve",
    "hercules-v3",
    "flowx-v2",
    "zealousswap",
    "mosaic-amm",
    "zyberswap-amm",
    "swop",
    "ramses-cl",
    "persistence-dex",
    "sparkdex-v2",
    "koalaswap",
    "joe-v2",
    "kaspacom-dex",
    "nerveswap",
]


def load_platforms(path: Path) -> List[str]:
    """Read platform IDs from a text file, one per line.

    Blank lines and lines starting with '#' are skipped. File order is kept.
    """
    platforms: List[str] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            platform = line.strip()
            if not platform or platform.startswith("#"):
                continue
            platforms.append(platform)
    return platforms
