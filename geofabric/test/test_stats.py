import numpy as np
import geopandas as gpd
import pytest
from shapely.geometry import LineString, Point
from geofabric.stats import (format_summary, get_geometry_kind, make_statistics_table,
                             statistics_table_metrics, summarize, write_statistics_table)


def test_summarize_lines(streams):
    stats = summarize(streams)
    assert stats.feature_count == 10
    assert stats.geometry_kind == 'line'
    assert np.allclose(stats.total_extent, 10000.)
    assert np.allclose(stats.mean_extent, 1000.)
    assert np.allclose(stats.max_extent, 1000.)
    assert stats.extent_units == 'm'
    assert stats.crs_id == 'EPSG:3577'
    assert stats.bounds == (0., 0., 1000., 900.)


def test_summarize_polygons(catchments):
    stats = summarize(catchments, geometry_kind='polygon')
    assert stats.feature_count == 5
    assert np.allclose(stats.total_extent, 5e6)
    assert np.allclose(stats.mean_extent, 1e6)
    assert stats.extent_units == 'm2'
    assert stats.bounds == (0., 0., 5000., 1000.)


def test_summarize_empty(streams):
    stats = summarize(streams.iloc[:0], geometry_kind='line')
    assert stats.feature_count == 0
    assert stats.total_extent == 0
    assert stats.mean_extent is None
    # bounding box is undefined, not (0, 0, 0, 0)
    assert stats.bounds is None
    assert stats.crs_id == 'EPSG:3577'
    assert 'undefined' in format_summary(stats, 'stream')


def test_summarize_geographic():
    # ~0.01 degree of longitude at 36.5 S
    df = gpd.GeoDataFrame({'geometry': [LineString([(145.0, -36.5), (145.01, -36.5)])]},
                          crs=4283)
    stats = summarize(df)
    assert np.allclose(stats.total_extent, 894.8, rtol=0.01)
    # crs and bounds are reported in the original coordinates
    assert stats.crs_id == 'EPSG:4283'
    assert np.allclose(stats.bounds, (145.0, -36.5, 145.01, -36.5))


def test_get_geometry_kind(streams, catchments):
    assert get_geometry_kind(streams) == 'line'
    assert get_geometry_kind(catchments) == 'polygon'
    assert get_geometry_kind(streams.iloc[:0]) is None
    mixed = gpd.GeoDataFrame(geometry=list(streams.geometry[:2]) + list(catchments.geometry[:2]))
    with pytest.raises(ValueError):
        get_geometry_kind(mixed)
    points = gpd.GeoDataFrame(geometry=[Point(0, 0)])
    with pytest.raises(ValueError):
        get_geometry_kind(points)


def test_format_summary(streams, catchments):
    text = format_summary(summarize(streams), 'stream')
    assert text.startswith('Stream Statistics:')
    assert '- Number of features: 10' in text
    assert '- Total length: 10.00 km' in text
    assert '- Max segment length: 1000.00 m' in text
    assert '- CRS: EPSG:3577' in text
    assert '  - North: 900.0000' in text
    text = format_summary(summarize(catchments), 'catchment')
    assert '- Total area: 5.00 km²' in text


def test_make_statistics_table(streams, catchments, tmp_path):
    table = make_statistics_table(summarize(streams), summarize(catchments))
    assert table['Metric'].tolist() == statistics_table_metrics
    values = dict(zip(table['Metric'], table['Value']))
    assert values['Total Stream Length (km)'] == 10.
    assert values['Total Catchment Area (km²)'] == 5.
    assert values['Number of Stream Segments'] == 10
    assert values['Number of Sub-catchments'] == 5
    assert values['Stream Density (km/km²)'] == 2.
    assert values['Mean Segment Length (m)'] == 1000.
    assert values['Mean Sub-catchment Area (km²)'] == 1.

    filename = write_statistics_table(table, tmp_path / 'statistics.csv')
    with open(filename, encoding='utf-8') as src:
        lines = src.readlines()
    assert lines[0].strip() == 'Metric,Value'
    assert len(lines) == 8
    assert lines[3].strip() == 'Number of Stream Segments,10'


def test_statistics_table_no_area(streams, catchments):
    table = make_statistics_table(summarize(streams),
                                  summarize(catchments.iloc[:0], geometry_kind='polygon'))
    values = dict(zip(table['Metric'], table['Value']))
    assert np.isnan(values['Stream Density (km/km²)'])
    assert np.isnan(values['Mean Sub-catchment Area (km²)'])
