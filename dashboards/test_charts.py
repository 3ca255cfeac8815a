"""
Tests for chart data formatting.
"""
import math

import pytest
from django.test import override_settings

from dashboards.charts import (
    MODE_EMPTY, MODE_LIST, MODE_PIE, build_chart, format_tooltip, percent_of, truncate_label,
)
from dashboards.services import ChartPoint


class TestPercentOf:

    def test_share_of_total(self):
        rows = [ChartPoint('SP', 1), ChartPoint('RJ', 2)]
        assert percent_of(1, rows) == 33.3
        assert percent_of(2, rows) == 66.7

    @pytest.mark.parametrize('rows', [
        [],
        [ChartPoint('A', 0), ChartPoint('B', 0)],
        [ChartPoint('A', None)],
    ])
    def test_zero_total_never_divides(self, rows):
        result = percent_of(0, rows)
        assert result == 0
        assert not math.isnan(result)


class TestTruncateLabel:

    def test_short_label_is_kept(self):
        assert truncate_label('Soy', 18) == 'Soy'

    def test_long_label_is_cut_with_ellipsis(self):
        label = truncate_label('Sugarcane for ethanol production', 10)
        assert label == 'Sugarcane…'
        assert len(label) == 10

    @override_settings(CHART_LABEL_MAX_LENGTH=5)
    def test_default_threshold_comes_from_settings(self):
        assert truncate_label('Coffee beans') == 'Coff…'


class TestFormatTooltip:

    def test_rows_are_annotated(self):
        rows = [ChartPoint('SP', 3), ChartPoint('RJ', 1)]

        formatted = format_tooltip(rows, max_label_length=18)

        assert formatted[0] == {
            'name': 'SP',
            'label': 'SP',
            'value': 3,
            'percentage': 75.0,
            'tooltip': '3 (75.0%)',
        }
        assert formatted[1]['tooltip'] == '1 (25.0%)'

    def test_values_are_not_altered(self):
        rows = [ChartPoint('Soy', 12.5)]
        assert format_tooltip(rows, 18)[0]['value'] == 12.5


class TestBuildChart:

    def test_pie(self):
        chart = build_chart('Farms by state', [ChartPoint('SP', 2)], max_label_length=18)
        assert chart['mode'] == MODE_PIE
        assert chart['total'] == 2
        assert chart['items'][0]['percentage'] == 100.0

    def test_all_zero_renders_as_list(self):
        chart = build_chart('Planted area', [ChartPoint('Soy', 0), ChartPoint('Corn', 0)], max_label_length=18)
        assert chart['mode'] == MODE_LIST
        assert [item['percentage'] for item in chart['items']] == [0.0, 0.0]

    def test_no_rows(self):
        chart = build_chart('Planted area', [], max_label_length=18)
        assert chart['mode'] == MODE_EMPTY
        assert chart['items'] == []
