"""Main workflow for extracting Goulburn River stream geometry
and catchment boundaries from the BoM Geofabric dataset.

Usage::

    python -m geofabric [config_file.yml]

or, from Python::

    from geofabric.workflow import run_workflow
    results = run_workflow('my_config.yml')
"""
from collections import namedtuple
from pathlib import Path
from geofabric.datasets import DatasetKind, default_specs
from geofabric.exceptions import DatasetNotFoundError, MalformedSourceError
from geofabric.extract import extract_dataset
from geofabric.fileio import load_config
from geofabric.gis import locate
from geofabric.logger import Logger
from geofabric.plots import plot_overview
from geofabric.stats import make_statistics_table, write_statistics_table
from geofabric.utils import get_input_arguments

WorkflowResult = namedtuple('WorkflowResult', ['results', 'errors', 'statistics', 'outputs'])

download_url = 'https://www.bom.gov.au/water/geofabric/download.shtml'

# configuration blocks for each dataset kind
config_blocks = {DatasetKind.STREAM: 'streams',
                 DatasetKind.CATCHMENT: 'catchments'}

# settings shared by both extractions
shared_settings = ('data_dir', 'output_dir', 'region', 'output_prefix',
                   'overwrite', 'crs')

rule = '=' * 62
subrule = '-' * 62


def download_instructions(data_dir='data'):
    """Instructions for getting the Geofabric data, which
    has to be downloaded manually from the BoM website."""
    return ('BoM Geofabric data should be downloaded from:\n'
            '{}\n\n'
            'Please download the Surface Hydrology (SH) network data for the\n'
            "Goulburn-Broken basin and place it in the '{}' directory.\n\n"
            'Expected file structure:\n'
            '- Stream network (lines): SH_Network/HR_Streams.shp\n'
            '- Catchments (polygons): SH_Catchment/HR_Catchments.shp\n'
            '- or a file geodatabase with both: SH_Network.gdb\n'.format(download_url, data_dir))


def check_geofabric_data(data_dir='data'):
    """Check whether stream and catchment data can be found in data_dir
    (at any of the known Geofabric locations).

    Returns
    -------
    exists : bool
    """
    for spec in default_specs.values():
        try:
            locate(data_dir, spec.candidate_paths, label=spec.label)
        except DatasetNotFoundError:
            return False
    return True


def run_workflow(config_file=None, **kwargs):
    """Extract stream geometry and catchment boundaries, then write
    a table of summary statistics and an overview map.

    The stream and catchment extractions are independent; if one fails
    because its data can't be found or read, the error is logged and
    the other extraction still runs.

    Parameters
    ----------
    config_file : str, pathlike or mapping, optional
        Configuration file in yaml format, or a dictionary-like mapping
        (see geofabric/default_config.yml for the options).
    **kwargs : dict
        Top-level configuration settings that take precedence over the
        configuration file (e.g. ``data_dir``, ``output_dir``, ``region``).

    Returns
    -------
    result : WorkflowResult
        results : dict of ExtractionResults, keyed by dataset kind value
            ('stream', 'catchment') for the extractions that succeeded
        errors : dict of exceptions, keyed by dataset kind value,
            for the extractions that failed
        statistics : DataFrame of summary statistics, or None if
            either extraction failed
        outputs : list of files written
    """
    cfg = load_config(config_file, **kwargs)
    output_dir = Path(cfg['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = Logger(output_dir / cfg['log_file'], echo=cfg['echo'])
    try:
        return _run(cfg, logger)
    finally:
        logger.close()


def _run(cfg, logger):
    data_dir = cfg['data_dir']
    output_dir = Path(cfg['output_dir'])
    prefix = cfg['output_prefix']
    logger.statement('\n'.join([rule, '{} River Geofabric Data Extraction Workflow'.format(cfg['region']),
                                rule]), log_time=False)

    logger.statement('Step 1: Checking for geofabric data...\n' + subrule, log_time=False)
    if check_geofabric_data(data_dir):
        logger.statement('Geofabric data found in: {}'.format(data_dir))
    else:
        logger.warn('Geofabric data not found (or incomplete) in: {}\n{}'.format(
            data_dir, download_instructions(data_dir)))

    results = {}
    errors = {}
    outputs = []
    for step, (kind, blockname) in enumerate(config_blocks.items(), start=2):
        label = default_specs[kind].label
        logger.statement('Step {}: Extracting {} data...\n{}'.format(step, label, subrule),
                         log_time=False)
        settings = {k: cfg[k] for k in shared_settings}
        settings.update(cfg.get(blockname) or {})
        extract_kwargs = get_input_arguments(settings, extract_dataset)
        try:
            result = extract_dataset(kind, logger=logger, **extract_kwargs)
        except DatasetNotFoundError as ex:
            errors[kind.value] = ex
            logger.statement('Error extracting {} data: {}\n{}'.format(
                label, ex, download_instructions(data_dir)))
            continue
        except MalformedSourceError as ex:
            errors[kind.value] = ex
            logger.statement('Error extracting {} data: {}\n'
                             'You may need to manually specify the {} layer.'.format(label, ex, label))
            continue
        results[kind.value] = result
        outputs += list(result.outputs.values())

    statistics = None
    stream_results = results.get(DatasetKind.STREAM.value)
    catchment_results = results.get(DatasetKind.CATCHMENT.value)
    if stream_results is not None and catchment_results is not None:
        statistics = make_statistics_table(stream_results.stats, catchment_results.stats)
        logger.statement('Summary statistics:\n{}'.format(statistics.to_string(index=False)),
                         log_time=False)
        if (cfg.get('statistics') or {}).get('write_table', True):
            filename = output_dir / '{}_statistics.csv'.format(prefix)
            write_statistics_table(statistics, filename)
            outputs.append(filename)
            logger.statement('Statistics saved to: {}'.format(filename))
    else:
        logger.statement('Skipping statistics table; both stream and catchment data are needed.')

    plot_cfg = cfg.get('plot') or {}
    if len(results) > 0 and plot_cfg.get('make_plot', True):
        filename = output_dir / '{}_overview.png'.format(prefix)
        plot_kwargs = get_input_arguments(plot_cfg, plot_overview)
        plot_overview(streams=getattr(stream_results, 'features', None),
                      catchments=getattr(catchment_results, 'features', None),
                      filename=filename, **plot_kwargs)
        outputs.append(filename)
        logger.statement('Visualization saved to: {}'.format(filename))

    logger.statement('\n'.join([rule, 'Workflow Complete!', rule]), log_time=False)
    if len(errors) > 0:
        logger.statement('Failed: {}'.format(', '.join(errors.keys())), log_time=False)
    logger.statement('Output files:\n{}'.format('\n'.join('- {}'.format(f) for f in outputs)),
                     log_time=False)
    return WorkflowResult(results=results, errors=errors,
                          statistics=statistics, outputs=outputs)
