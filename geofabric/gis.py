from collections import namedtuple
import os
from pathlib import Path
import fiona
from fiona.errors import FionaError
from gisutils import get_authority_crs
from geofabric.exceptions import DatasetNotFoundError, MalformedSourceError

# multi-layer container formats; these require a layer name to read
container_suffixes = ('.gdb', '.gpkg')

ResolvedSource = namedtuple('ResolvedSource', ['path', 'layer_name', 'layer_matched'])


def locate(data_dir, candidate_paths, label='Geofabric'):
    """Find the first existing path among a sequence of
    candidate locations.

    Parameters
    ----------
    data_dir : str or pathlike
        Root folder that candidate paths are relative to.
    candidate_paths : sequence of str or pathlike
        Candidate locations, in order of priority. Both files
        (e.g. shapefiles) and folders (e.g. file geodatabases) count.
    label : str
        Name of the dataset, for the error message.

    Returns
    -------
    path : Path
        The first candidate that exists. Later candidates are
        not considered, even if they also exist.

    Raises
    ------
    DatasetNotFoundError
        If none of the candidates exist; the ``candidates``
        attribute lists every location that was tried, in order.
    """
    candidates = [Path(data_dir) / p for p in candidate_paths]
    if len(candidates) == 0:
        raise ValueError('At least one candidate path is needed to locate {} data'.format(label))
    for path in candidates:
        if os.path.exists(path):
            return path
    raise DatasetNotFoundError(candidates, label=label)


def is_container(path):
    """Whether path is a multi-layer container (file geodatabase, GeoPackage)."""
    return Path(path).suffix.lower() in container_suffixes


def list_layers(path):
    """List the layer names in a container dataset, in the order
    they are reported by the driver.

    Raises
    ------
    MalformedSourceError
        If the container can't be opened or has no layers.
    """
    try:
        layers = fiona.listlayers(str(path))
    except (FionaError, OSError) as ex:
        raise MalformedSourceError('Could not list layers in {}:\n{}'.format(path, ex),
                                   path=path) from ex
    if len(layers) == 0:
        raise MalformedSourceError('No layers found in {}'.format(path), path=path)
    return layers


def select_layer(layer_names, keyword, preferred=None):
    """Pick a layer from a list of layer names.

    Parameters
    ----------
    layer_names : sequence of str
    keyword : str
        Case-insensitive substring to search for in the layer names
        (e.g. 'Catchment').
    preferred : str, optional
        Layer name to use if present (case-insensitive exact match).

    Returns
    -------
    layer_name : str
        The preferred layer if present, otherwise the first layer
        containing ``keyword``, otherwise the first layer.
    matched : bool
        False if no layer matched and the first layer was
        used as a fallback.
    """
    layer_names = list(layer_names)
    if len(layer_names) == 0:
        raise ValueError('No layers to select from')
    if preferred is not None:
        for name in layer_names:
            if name.lower() == preferred.lower():
                return name, True
    for name in layer_names:
        if keyword.lower() in name.lower():
            return name, True
    return layer_names[0], False


def resolve_layer(container_path, keyword, preferred=None):
    """Select a layer from a container dataset; see :func:`select_layer`."""
    layer_names = list_layers(container_path)
    return select_layer(layer_names, keyword, preferred=preferred)


def resolve_source(data_dir, spec, layer=None):
    """Locate the dataset described by a :class:`~geofabric.datasets.DatasetSpec`
    and, for container formats, resolve which layer to read.

    Parameters
    ----------
    data_dir : str or pathlike
    spec : DatasetSpec
    layer : str, optional
        Layer name hint; by default, ``spec.layer_name``.

    Returns
    -------
    source : ResolvedSource
    """
    path = locate(data_dir, spec.candidate_paths, label=spec.label)
    if not is_container(path):
        return ResolvedSource(path, None, None)
    if layer is None:
        layer = spec.layer_name
    layer_name, matched = resolve_layer(path, spec.layer_keyword, preferred=layer)
    return ResolvedSource(path, layer_name, matched)


def get_crs(crs=None):
    """Get a :class:`pyproj.crs.CRS` instance, with an authority code
    where one can be identified, from any input accepted by
    :meth:`pyproj.crs.CRS.from_user_input`.
    """
    if crs is not None:
        crs = get_authority_crs(crs)
    return crs


def get_crs_id(crs):
    """String identifier (e.g. 'EPSG:4283') for a CRS, or None."""
    if crs is None:
        return None
    authority = crs.to_authority()
    if authority is not None:
        return ':'.join(authority)
    return crs.to_string()


def get_bbox(df):
    """Bounding box (xmin, ymin, xmax, ymax) of a GeoDataFrame,
    or None if there are no (non-empty) geometries.
    """
    geoms = df.geometry
    geoms = geoms[geoms.notna() & ~geoms.is_empty]
    if len(geoms) == 0:
        return None
    return tuple(float(v) for v in geoms.total_bounds)


def to_metric_crs(df):
    """Reproject a GeoDataFrame in a geographic CRS to the local UTM zone,
    so that lengths and areas come out in meters. Projected data
    (or data without a CRS) are returned as-is.
    """
    if df.crs is None or not df.crs.is_geographic or len(df) == 0:
        return df
    utm_crs = df.estimate_utm_crs()
    return df.to_crs(utm_crs)
