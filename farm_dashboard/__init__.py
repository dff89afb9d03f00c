"""Top‑level package for the Farm Dashboard.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``analytics`` – expense aggregation, budget evaluation and profit projection
* ``store`` – in-memory record stores for farms, crops, expenses and budgets
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run farm_dashboard/dashboard.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import store  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience
# Streamlit may not be installed in all environments (e.g. during unit
# testing).  If the import fails, ``dashboard`` is ``None``.
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = ["analytics", "store", "visualization", "dashboard"]
