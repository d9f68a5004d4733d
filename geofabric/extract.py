"""Extraction of stream geometry and catchment boundaries
from BoM Geofabric Surface Hydrology data.

Each extraction:

1. locates the dataset in the data folder (and the layer to read,
   for file geodatabases or GeoPackages)
2. loads the features
3. optionally filters them to the region of interest
   (e.g. the Goulburn River), by name
4. exports the features to a shapefile and a GeoJSON file
5. computes summary statistics
"""
from collections import namedtuple
from pathlib import Path
from geofabric.datasets import get_dataset_spec
from geofabric.exceptions import ExportError
from geofabric.fileio import read_features, export_features
from geofabric.filtering import filter_by_region
from geofabric.gis import resolve_source
from geofabric.logger import Logger
from geofabric.stats import summarize, format_summary

ExtractionResult = namedtuple('ExtractionResult', ['spec',
                                                   'source',
                                                   'features',
                                                   'filter_outcome',
                                                   'outputs',
                                                   'export_error',
                                                   'stats'])


def extract_dataset(kind, data_dir='data', output_dir='output',
                    layer=None, region_filter=True, region='Goulburn',
                    name_columns=None, candidate_paths=None,
                    output_prefix='goulburn', crs=None, overwrite=True,
                    logger=None):
    """Extract one kind of Geofabric dataset.

    Parameters
    ----------
    kind : {'stream', 'catchment'} or DatasetKind
    data_dir : str or pathlike
        Folder containing the Geofabric data.
    output_dir : str or pathlike
        Folder for the output shapefile and GeoJSON file;
        created if it doesn't exist.
    layer : str, optional
        Layer to read if the data are in a file geodatabase or GeoPackage.
        If the layer isn't in the container, the first layer with the
        dataset keyword (e.g. 'Stream') in its name is read instead.
        By default, the default layer name for the dataset kind.
    region_filter : bool
        Option to keep only features with ``region`` in a name attribute.
        If no name attributes are found, or none contain ``region``,
        all features are kept.
    region : str
        Name of the region of interest, by default 'Goulburn'.
    name_columns : sequence of str, optional
        Attribute columns to search for ``region``;
        by default, the standard name columns for the dataset kind.
    candidate_paths : sequence of str, optional
        Locations to look for the dataset, relative to ``data_dir``;
        by default, the known Geofabric layouts for the dataset kind.
    output_prefix : str
        Prefix for output file names, by default 'goulburn'
        (e.g. goulburn_streams.shp).
    crs : obj, optional
        Coordinate reference system to assign if the source has none.
    overwrite : bool
        Option to replace existing output files. If False and the
        outputs exist, the export is skipped (see ``export_error``
        in the results) but statistics are still computed.
    logger : geofabric.logger.Logger instance, optional
        Pass an existing logger to continue writing to an open
        logger file. By default, a logger file is appended to
        in ``output_dir``.

    Returns
    -------
    result : ExtractionResult

    Raises
    ------
    DatasetNotFoundError
        If the dataset isn't found at any of the candidate paths.
    MalformedSourceError
        If the dataset can't be read.
    """
    spec = get_dataset_spec(kind, name_columns=name_columns,
                            candidate_paths=candidate_paths)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    close_logger = False
    if logger is None:
        logger = Logger(output_dir / 'geofabric.logger', mode='a', echo=True)
        close_logger = True
    try:
        return _extract(spec, data_dir, output_dir, layer, region_filter, region,
                        output_prefix, crs, overwrite, logger)
    finally:
        if close_logger:
            logger.close()


def _extract(spec, data_dir, output_dir, layer, region_filter, region,
             output_prefix, crs, overwrite, logger):
    label = spec.label
    logger.log('extracting {} data'.format(label))

    source = resolve_source(data_dir, spec, layer=layer)
    logger.statement('Loading {} data from: {}'.format(label, source.path))
    if source.layer_name is not None:
        if source.layer_matched:
            logger.statement('Using layer: {}'.format(source.layer_name))
        else:
            logger.warn("No layer matching '{}' found in {}; "
                        "using first layer: {}".format(spec.layer_keyword,
                                                       source.path, source.layer_name))
    df = read_features(source, crs=crs)
    logger.statement('Original {} data:\n- Features: {}\n- CRS: {}'.format(
        label, len(df), df.crs), log_time=False)

    outcome = None
    if region_filter:
        logger.statement('Filtering for {} {} features...'.format(region, label))
        outcome = filter_by_region(df, spec.name_columns, region)
        if outcome.matched:
            logger.statement('Available name columns: {}'.format(', '.join(outcome.matched_columns)))
            logger.statement('Filtered to {} {} {} features'.format(
                len(outcome.kept), region, label))
        else:
            logger.warn('{}\nProceeding with all {} features.'.format(outcome.note, label))
        df = outcome.kept

    basename = '{}_{}'.format(output_prefix, spec.output_basename) \
        if output_prefix else spec.output_basename
    outputs = {}
    export_error = None
    try:
        outputs = export_features(df, output_dir, basename, overwrite=overwrite)
        for fmt, filename in outputs.items():
            logger.statement('wrote {}'.format(filename))
    except ExportError as ex:
        export_error = ex
        logger.warn('Export of {} features failed:\n{}'.format(label, ex))

    stats = summarize(df, geometry_kind=spec.geometry_kind)
    logger.statement(format_summary(stats, label), log_time=False)
    logger.log('extracting {} data'.format(label))
    return ExtractionResult(spec=spec, source=source, features=df,
                            filter_outcome=outcome, outputs=outputs,
                            export_error=export_error, stats=stats)


def extract_stream_geometry(data_dir='data', output_dir='output',
                            stream_layer=None, goulburn_filter=True,
                            **kwargs):
    """Extract stream network lines; see :func:`extract_dataset`
    for the other keyword arguments."""
    return extract_dataset('stream', data_dir=data_dir, output_dir=output_dir,
                           layer=stream_layer, region_filter=goulburn_filter,
                           **kwargs)


def extract_catchment_boundaries(data_dir='data', output_dir='output',
                                 catchment_layer=None, goulburn_filter=True,
                                 **kwargs):
    """Extract catchment boundary polygons; see :func:`extract_dataset`
    for the other keyword arguments."""
    return extract_dataset('catchment', data_dir=data_dir, output_dir=output_dir,
                           layer=catchment_layer, region_filter=goulburn_filter,
                           **kwargs)
