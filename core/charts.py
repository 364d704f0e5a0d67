from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def rows_frame(rows: Iterable[Mapping[str, Any]], columns: List[str]) -> pd.DataFrame:
    """Report rows as a frame holding at least ``columns`` (empty reports included)."""
    df = pd.DataFrame(list(rows))
    for col in columns:
        if col not in df.columns:
            df[col] = pd.Series(dtype=object)
    return df
