"""Summary statistics for extracted stream and catchment features."""
from collections import namedtuple
import warnings
import numpy as np
import pandas as pd
from geofabric.gis import get_bbox, get_crs_id, to_metric_crs

SummaryStats = namedtuple('SummaryStats', ['feature_count',
                                           'geometry_kind',
                                           'total_extent',
                                           'mean_extent',
                                           'max_extent',
                                           'extent_units',
                                           'crs_id',
                                           'bounds'])

geometry_kinds = {'LineString': 'line',
                  'MultiLineString': 'line',
                  'Polygon': 'polygon',
                  'MultiPolygon': 'polygon'}

extent_units = {'line': 'm', 'polygon': 'm2'}

# rows in the statistics table, in order
statistics_table_metrics = ['Total Stream Length (km)',
                            'Total Catchment Area (km²)',
                            'Number of Stream Segments',
                            'Number of Sub-catchments',
                            'Stream Density (km/km²)',
                            'Mean Segment Length (m)',
                            'Mean Sub-catchment Area (km²)']


def get_geometry_kind(df):
    """'line' or 'polygon', depending on the geometry types in df;
    None if there are no geometries."""
    geoms = df.geometry
    geoms = geoms[geoms.notna() & ~geoms.is_empty]
    types = set(geoms.geom_type)
    if len(types) == 0:
        return None
    kinds = {geometry_kinds.get(t) for t in types}
    if None in kinds:
        unsupported = sorted(t for t in types if t not in geometry_kinds)
        raise ValueError('Unsupported geometry types: {}'.format(', '.join(unsupported)))
    if len(kinds) > 1:
        raise ValueError('Mixed line and polygon geometries: {}'.format(', '.join(sorted(types))))
    return kinds.pop()


def get_extents(df, geometry_kind):
    """Length (lines) or area (polygons) of each feature, in meters
    or square meters. Features without geometry have zero extent.
    """
    valid = df.geometry.notna() & ~df.geometry.is_empty
    extents = pd.Series(0., index=df.index)
    if not valid.any():
        return extents
    measured = to_metric_crs(df.loc[valid])
    if measured.crs is None or len(measured.crs.axis_info) == 0:
        warnings.warn('No coordinate reference system (or length units) for input features; '
                      'assuming coordinates are in meters.')
        factor = 1.
    else:
        factor = measured.crs.axis_info[0].unit_conversion_factor
    if geometry_kind == 'line':
        values = measured.geometry.length * factor
    else:
        values = measured.geometry.area * factor ** 2
    extents.loc[valid] = values.values
    return extents


def summarize(df, geometry_kind=None):
    """Compute summary statistics for a set of line or polygon features.

    Parameters
    ----------
    df : GeoDataFrame
    geometry_kind : {'line', 'polygon'}, optional
        By default, inferred from the geometry types.

    Returns
    -------
    stats : SummaryStats
        feature_count : number of features
        geometry_kind : 'line' or 'polygon'
        total_extent : total length (m) or area (m2)
        mean_extent, max_extent : mean and max feature length or area;
            None if there are no features
        extent_units : 'm' or 'm2'
        crs_id : identifier of the coordinate reference system, as attached
            to df (no reprojection); None if df has no CRS
        bounds : (xmin, ymin, xmax, ymax) in the native coordinates of df;
            None if there are no features (the bounding box is undefined)

    Notes
    -----
    Features in a geographic CRS are projected to the local UTM zone
    for computing lengths and areas.
    """
    if geometry_kind is None:
        geometry_kind = get_geometry_kind(df)
    elif geometry_kind not in extent_units:
        raise ValueError('Unrecognized geometry_kind "{}"'.format(geometry_kind))
    crs_id = get_crs_id(df.crs)
    if len(df) == 0:
        return SummaryStats(0, geometry_kind, 0., None, None,
                            extent_units.get(geometry_kind), crs_id, None)
    extents = get_extents(df, geometry_kind)
    return SummaryStats(feature_count=len(df),
                        geometry_kind=geometry_kind,
                        total_extent=float(extents.sum()),
                        mean_extent=float(extents.mean()),
                        max_extent=float(extents.max()),
                        extent_units=extent_units.get(geometry_kind),
                        crs_id=crs_id,
                        bounds=get_bbox(df))


def format_summary(stats, label='Feature'):
    """Text report of a :class:`SummaryStats` instance."""
    lines = ['{} Statistics:'.format(label.capitalize()),
             '- Number of features: {}'.format(stats.feature_count)]
    if stats.geometry_kind == 'line':
        lines.append('- Total length: {:.2f} km'.format(stats.total_extent / 1000))
        if stats.mean_extent is not None:
            lines.append('- Mean segment length: {:.2f} m'.format(stats.mean_extent))
            lines.append('- Max segment length: {:.2f} m'.format(stats.max_extent))
    elif stats.geometry_kind == 'polygon':
        lines.append('- Total area: {:.2f} km²'.format(stats.total_extent / 1e6))
        if stats.mean_extent is not None:
            lines.append('- Mean area: {:.2f} km²'.format(stats.mean_extent / 1e6))
    lines.append('- CRS: {}'.format(stats.crs_id or 'undefined'))
    if stats.bounds is None:
        lines.append('- Bounding box: undefined (no features)')
    else:
        xmin, ymin, xmax, ymax = stats.bounds
        lines.append('- Bounding box:')
        lines.append('  - West: {:.4f}'.format(xmin))
        lines.append('  - East: {:.4f}'.format(xmax))
        lines.append('  - South: {:.4f}'.format(ymin))
        lines.append('  - North: {:.4f}'.format(ymax))
    return '\n'.join(lines)


def make_statistics_table(stream_stats, catchment_stats):
    """Make a table of stream network and catchment metrics.

    Parameters
    ----------
    stream_stats : SummaryStats
        Statistics for the stream lines.
    catchment_stats : SummaryStats
        Statistics for the catchment polygons.

    Returns
    -------
    table : DataFrame
        Columns 'Metric' and 'Value', with one row for each of
        ``statistics_table_metrics``. Values are rounded to 2 decimal places;
        stream density is NaN if the total catchment area is zero.
    """
    total_length_km = stream_stats.total_extent / 1000
    total_area_km2 = catchment_stats.total_extent / 1e6
    if total_area_km2 > 0:
        stream_density = total_length_km / total_area_km2
    else:
        stream_density = np.nan
    mean_length = stream_stats.mean_extent
    mean_area_km2 = None
    if catchment_stats.mean_extent is not None:
        mean_area_km2 = catchment_stats.mean_extent / 1e6
    values = [round(total_length_km, 2),
              round(total_area_km2, 2),
              stream_stats.feature_count,
              catchment_stats.feature_count,
              np.round(stream_density, 2),
              np.nan if mean_length is None else round(mean_length, 2),
              np.nan if mean_area_km2 is None else round(mean_area_km2, 2)
              ]
    return pd.DataFrame({'Metric': statistics_table_metrics,
                         'Value': pd.Series(values, dtype=object)})


def write_statistics_table(table, filename):
    table.to_csv(filename, index=False)
    return filename
