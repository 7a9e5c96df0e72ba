# uiplan/content.py
# Placeholder content used by templates and edit additions.
# Swap in another TemplateContent to change sample data without touching synthesis.
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _series(*points) -> List[Dict[str, Any]]:
    return [{"label": label, "value": value} for label, value in points]


def _default_chart_series() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "monthly": _series(("Jan", 45), ("Feb", 60), ("Mar", 75)),
        "monthly_extended": _series(("Jan", 45), ("Feb", 60), ("Mar", 75), ("Apr", 65)),
        "quarterly": _series(("Q1", 40), ("Q2", 55), ("Q3", 70), ("Q4", 65)),
        "weekly": _series(("Week 1", 40), ("Week 2", 50), ("Week 3", 65), ("Week 4", 75)),
        "daily": _series(("Mon", 50), ("Tue", 60), ("Wed", 70), ("Thu", 65), ("Fri", 80)),
        "categories": _series(("A", 30), ("B", 45), ("C", 55)),
        "dashboard": _series(("Jan", 50), ("Feb", 75), ("Mar", 60)),
        "split": _series(("Data 1", 30), ("Data 2", 45), ("Data 3", 35)),
        "added": _series(("Jan", 45), ("Feb", 60)),
    }


def _default_tables() -> Dict[str, Dict[str, Any]]:
    return {
        "items": {
            "columns": [
                {"header": "Item", "key": "item"},
                {"header": "Status", "key": "status"},
                {"header": "Value", "key": "value"},
            ],
            "data": [
                {"item": "Item 1", "status": "Active", "value": "100"},
                {"item": "Item 2", "status": "Inactive", "value": "80"},
                {"item": "Item 3", "status": "Active", "value": "95"},
            ],
        },
        "records": {
            "columns": [
                {"header": "ID", "key": "id"},
                {"header": "Value", "key": "value"},
                {"header": "Status", "key": "status"},
            ],
            "data": [
                {"id": "1", "value": "100", "status": "Active"},
                {"id": "2", "value": "200", "status": "Active"},
                {"id": "3", "value": "150", "status": "Inactive"},
            ],
        },
        "metrics": {
            "columns": [
                {"header": "Metric", "key": "metric"},
                {"header": "Value", "key": "value"},
            ],
            "data": [
                {"metric": "Users", "value": "1,234"},
                {"metric": "Revenue", "value": "$50K"},
                {"metric": "Growth", "value": "15%"},
            ],
        },
        "tasks": {
            "columns": [
                {"header": "Name", "key": "name"},
                {"header": "Status", "key": "status"},
            ],
            "data": [
                {"name": "Item A", "status": "Done"},
                {"name": "Item B", "status": "Pending"},
            ],
        },
        "added": {
            "columns": [
                {"header": "ID", "key": "id"},
                {"header": "Name", "key": "name"},
            ],
            "data": [{"id": "1", "name": "Item 1"}],
        },
    }


@dataclass(frozen=True)
class TemplateContent:
    default_title: str = "Welcome"
    sidebar_width: int = 250
    chart_series: Dict[str, List[Dict[str, Any]]] = field(default_factory=_default_chart_series)
    tables: Dict[str, Dict[str, Any]] = field(default_factory=_default_tables)
    settings_title: str = "Settings"
    settings_input_count: int = 2
    gallery_size: int = 3

    def series(self, name: str) -> List[Dict[str, Any]]:
        # Copies keep every plan independent of the shared fixtures.
        return copy.deepcopy(self.chart_series.get(name, []))

    def table(self, name: str, rows: Optional[int] = None) -> Dict[str, Any]:
        table = copy.deepcopy(self.tables.get(name, {"columns": [], "data": []}))
        if rows is not None:
            table["data"] = table["data"][:rows]
        return table


DEFAULT_CONTENT = TemplateContent()
