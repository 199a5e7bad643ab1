"""Export of sensitivity curves and raw results to tables, CSV and JSON."""

import json
import math
from typing import Any, Dict, List

import pandas as pd

from ..analysis.sensitivity import SensitivityCurve
from ..simulation.runner import PerturbationResults


def curves_to_frame(curves: List[SensitivityCurve]) -> pd.DataFrame:
    """Tidy table of curves: one row per (moment, x) point."""
    data = []
    for curve in curves:
        for x, y in zip(curve.x, curve.y):
            data.append({
                'moment': curve.label,
                'x': float(x),
                'y': float(y)
            })
    return pd.DataFrame(data, columns=['moment', 'x', 'y'])


def results_to_frame(results: PerturbationResults) -> pd.DataFrame:
    """One row per evaluated point of every registered perturbation."""
    data = []
    for p, raw in results.entries:
        for i, (delta, r) in enumerate(zip(results.effective_domain(p), raw)):
            data.append({
                'perturbation': p.label,
                'index': i,
                'delta': delta,
                'failed': r is None
            })
    return pd.DataFrame(data, columns=['perturbation', 'index', 'delta', 'failed'])


def export_csv(curves: List[SensitivityCurve], filepath: str):
    """Export sensitivity curves to CSV (failed points as empty cells)."""
    curves_to_frame(curves).to_csv(filepath, index=False)


def _curve_record(curve: SensitivityCurve) -> Dict[str, Any]:
    record = curve.to_dict()
    record['y'] = [None if math.isnan(y) else y for y in record['y']]
    return record


def export_json(curves: List[SensitivityCurve], filepath: str):
    """Export sensitivity curves to JSON (failed points as null)."""
    export_data = {
        'curves': [_curve_record(curve) for curve in curves]
    }

    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2, default=str)
