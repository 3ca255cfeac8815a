"""
Chart data formatting for the dashboard.

Turns aggregate ``{name, value}`` rows into what the pie charts render:
percentage of the total, a shortened legend label and a tooltip string.
A zero total never produces a division; rows that are all zero switch the
chart to a plain list.
"""

from django.conf import settings

from .services.aggregation import as_number

ELLIPSIS = '…'

MODE_PIE = 'pie'
MODE_LIST = 'list'
MODE_EMPTY = 'empty'


def total_of(rows):
    return sum(as_number(row.value) for row in rows)


def percent_of(value, rows):
    """Share of ``value`` in the rows' total, rounded to one decimal; 0 when the total is 0."""
    total = total_of(rows)
    if total <= 0:
        return 0.0
    return round(as_number(value) / total * 100, 1)


def truncate_label(name, max_length=None):
    """Shorten a legend label, marking the cut with an ellipsis."""
    if max_length is None:
        max_length = settings.CHART_LABEL_MAX_LENGTH
    name = str(name)
    if len(name) <= max_length:
        return name
    return name[:max(max_length - len(ELLIPSIS), 1)] + ELLIPSIS


def is_all_zero(rows):
    return bool(rows) and all(as_number(row.value) == 0 for row in rows)


def _format_value(value):
    value = as_number(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_tooltip(rows, max_label_length=None):
    """Annotate each row with label, percentage and tooltip text. Values are left untouched."""
    total = total_of(rows)
    formatted = []
    for row in rows:
        value = as_number(row.value)
        percentage = round(value / total * 100, 1) if total > 0 else 0.0
        formatted.append({
            'name': row.name,
            'label': truncate_label(row.name, max_label_length),
            'value': value,
            'percentage': percentage,
            'tooltip': f"{_format_value(value)} ({percentage}%)",
        })
    return formatted


def build_chart(title, rows, max_label_length=None):
    """
    Chart payload with its render mode.

    - ``empty`` when there are no rows
    - ``list`` when every row is zero (a pie of zeros is meaningless)
    - ``pie`` otherwise
    """
    rows = list(rows)
    if not rows:
        mode = MODE_EMPTY
    elif is_all_zero(rows):
        mode = MODE_LIST
    else:
        mode = MODE_PIE

    return {
        'title': title,
        'mode': mode,
        'total': total_of(rows),
        'items': format_tooltip(rows, max_label_length),
    }
