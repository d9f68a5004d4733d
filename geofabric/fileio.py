import copy
import os
from pathlib import Path
import yaml
import geopandas as gpd
from fiona.errors import FionaError
from geofabric.exceptions import ExportError, MalformedSourceError
from geofabric.gis import get_crs
from geofabric.utils import update

# output formats written for each extracted dataset
# <format name>: (fiona driver, file extension)
export_formats = {'shapefile': ('ESRI Shapefile', '.shp'),
                  'geojson': ('GeoJSON', '.geojson')
                  }

shapefile_sidecars = ('.shp', '.shx', '.dbf', '.prj', '.cpg',
                      '.qix', '.sbn', '.sbx', '.shp.xml')

defaults_file = Path(__file__).parent / 'default_config.yml'


def read_features(source, crs=None):
    """Read vector features into a GeoDataFrame.

    Parameters
    ----------
    source : ResolvedSource, str or pathlike
        Dataset to read. If a :class:`~geofabric.gis.ResolvedSource`
        with a ``layer_name``, that layer is read from the container.
    crs : obj, optional
        Coordinate reference system to assign if the source has none
        (e.g. a shapefile without a .prj file). Any input accepted by
        :meth:`pyproj.crs.CRS.from_user_input`.

    Returns
    -------
    df : GeoDataFrame

    Raises
    ------
    MalformedSourceError
        If the source can't be read as vector features, or its
        coordinate reference system differs from crs.
    """
    layer = getattr(source, 'layer_name', None)
    path = getattr(source, 'path', source)
    kwargs = {}
    if layer is not None:
        kwargs['layer'] = layer
    try:
        df = gpd.read_file(path, engine='fiona', **kwargs)
    except (FionaError, OSError) as ex:
        raise MalformedSourceError('Could not read vector features from {}{}:\n{}'.format(
            path, '' if layer is None else ', layer {}'.format(layer), ex),
            path=path) from ex
    crs = get_crs(crs)
    if crs is not None:
        if df.crs is None:
            df = df.set_crs(crs)
        elif df.crs != crs:
            raise MalformedSourceError('Different coordinate reference systems '
                                       f'in crs argument and {path}\n'
                                       f'\nuser supplied crs: {crs}  !=\ncrs from file: {df.crs}',
                                       path=path)
    return df


def remove_existing(path):
    """Delete an existing output file; for shapefiles,
    the sidecar files are removed too."""
    path = Path(path)
    if path.suffix.lower() == '.shp':
        stem = path.with_suffix('')
        for ext in shapefile_sidecars:
            f = Path(str(stem) + ext)
            if f.exists():
                f.unlink()
    elif path.exists():
        path.unlink()


def write_features(df, filename, driver=None, overwrite=True):
    """Write a GeoDataFrame to a vector file.

    Parameters
    ----------
    df : GeoDataFrame
    filename : str or pathlike
    driver : str, optional
        fiona driver name; by default inferred from the file extension.
    overwrite : bool
        If False and the output already exists, raise an
        :class:`~geofabric.exceptions.ExportError` instead of replacing it.

    Returns
    -------
    filename : Path
    """
    filename = Path(filename)
    if driver is None:
        drivers = {ext: d for d, ext in export_formats.values()}
        driver = drivers.get(filename.suffix.lower())
        if driver is None:
            raise ValueError('Unrecognized output format: {}'.format(filename))
    if filename.exists() and not overwrite:
        raise ExportError('{} already exists; '
                          'use overwrite=True to replace it'.format(filename),
                          path=filename)
    try:
        remove_existing(filename)
        df.to_file(filename, driver=driver, engine='fiona', index=False)
    except (FionaError, OSError, ValueError) as ex:
        raise ExportError('Could not write {}:\n{}'.format(filename, ex),
                          path=filename) from ex
    return filename


def export_features(df, output_dir, basename, formats=None, overwrite=True):
    """Write the same features to each of the output formats
    (by default, a shapefile and a GeoJSON file).

    If any format can't be written, the files already written by this
    call are removed before the :class:`~geofabric.exceptions.ExportError`
    is re-raised, so that the outputs are either all written or not at all.

    Returns
    -------
    outputs : dict
        Output paths, keyed by format name.
    """
    if formats is None:
        formats = list(export_formats.keys())
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    outputs = {}
    for fmt in formats:
        driver, ext = export_formats[fmt]
        try:
            outputs[fmt] = write_features(df, output_dir / (basename + ext),
                                          driver=driver, overwrite=overwrite)
        except ExportError:
            for filename in outputs.values():
                remove_existing(filename)
            raise
    return outputs


def load_yaml(yamlfile):
    with open(yamlfile) as src:
        return yaml.load(src, Loader=yaml.SafeLoader)


def load_config(config_file=None, **kwargs):
    """Load the workflow configuration.

    Parameters
    ----------
    config_file : str, pathlike or mapping, optional
        YAML configuration file, or a dictionary-like mapping of the
        same structure. Relative data_dir and output_dir paths in a
        configuration file are interpreted relative to the file.
    **kwargs : dict
        Top-level settings that override both the defaults
        and the configuration file (e.g. ``data_dir='data'``).
        Values of None are ignored.

    Returns
    -------
    cfg : dict
        The default configuration (default_config.yml), updated
        with the configuration file and keyword arguments.
    """
    cfg = load_yaml(defaults_file)
    if config_file is not None:
        if isinstance(config_file, str) or isinstance(config_file, Path):
            user_cfg = load_yaml(config_file) or {}
            config_path = os.path.split(os.path.abspath(config_file))[0]
            for key in 'data_dir', 'output_dir':
                if key in user_cfg and not os.path.isabs(user_cfg[key]):
                    user_cfg[key] = os.path.normpath(os.path.join(config_path, user_cfg[key]))
        else:
            user_cfg = copy.deepcopy(dict(config_file))
        cfg = update(cfg, user_cfg)
    cfg = update(cfg, {k: v for k, v in kwargs.items() if v is not None})
    return cfg
