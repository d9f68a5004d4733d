"""Known layouts of the BoM Geofabric Surface Hydrology datasets.

Each dataset kind is described by a :class:`DatasetSpec`; the locator,
layer resolver and regional filter are all driven from these tables,
so a new layout can be supported by adding a candidate path here.
"""
from collections import namedtuple
from enum import Enum


class DatasetKind(Enum):
    STREAM = 'stream'
    CATCHMENT = 'catchment'


DatasetSpec = namedtuple('DatasetSpec', ['kind',
                                         'candidate_paths',
                                         'layer_keyword',
                                         'name_columns',
                                         'layer_name',
                                         'output_basename',
                                         'geometry_kind',
                                         'label'])

# candidate paths are relative to the data directory;
# listed in order of priority (first existing path wins)
STREAM_SPEC = DatasetSpec(
    kind=DatasetKind.STREAM,
    candidate_paths=('SH_Network/HR_Streams.shp',
                     'SH_Network/HR_Stream.shp',
                     'SH_Network.gdb',
                     'SH_Network.gpkg',
                     'SH_Cartography/HR_Streams.shp'),
    layer_keyword='Stream',
    name_columns=('Name', 'STREAM_NAM', 'StreamName', 'RIVERNAME',
                  'river_name', 'stream_name', 'HYDROID', 'AUSRIVNAME'),
    layer_name='HR_Streams',
    output_basename='streams',
    geometry_kind='line',
    label='stream'
)

CATCHMENT_SPEC = DatasetSpec(
    kind=DatasetKind.CATCHMENT,
    candidate_paths=('SH_Catchment/HR_Catchments.shp',
                     'SH_Catchment/HR_Catchment.shp',
                     'SH_Network.gdb',
                     'SH_Catchments.gdb',
                     'SH_Network.gpkg',
                     'Catchments/HR_Catchments.shp'),
    layer_keyword='Catchment',
    name_columns=('Name', 'CATCHNAME', 'CatchmentName', 'BASINNAME',
                  'basin_name', 'catchment_name', 'DIVNAME', 'AHGFCATCHM'),
    layer_name='HR_Catchments',
    output_basename='catchments',
    geometry_kind='polygon',
    label='catchment'
)

default_specs = {DatasetKind.STREAM: STREAM_SPEC,
                 DatasetKind.CATCHMENT: CATCHMENT_SPEC}


def get_dataset_spec(kind, **kwargs):
    """Get the :class:`DatasetSpec` for a dataset kind,
    with any fields replaced by keyword arguments.

    Parameters
    ----------
    kind : str or DatasetKind
        'stream' or 'catchment'
    **kwargs : dict, optional
        DatasetSpec fields to override (e.g. ``name_columns``,
        ``layer_name``, ``candidate_paths``). Values of None are ignored,
        so that unset arguments fall back to the defaults.

    Returns
    -------
    spec : DatasetSpec
    """
    kind = DatasetKind(kind)
    spec = default_specs[kind]
    overrides = {k: v for k, v in kwargs.items() if v is not None}
    unknown = set(overrides).difference(DatasetSpec._fields)
    if unknown:
        raise ValueError('Unrecognized DatasetSpec fields: {}'.format(', '.join(sorted(unknown))))
    for field in 'candidate_paths', 'name_columns':
        if field in overrides:
            if isinstance(overrides[field], str):
                overrides[field] = (overrides[field],)
            overrides[field] = tuple(overrides[field])
    if 'kind' in overrides:
        overrides['kind'] = DatasetKind(overrides['kind'])
    return spec._replace(**overrides)
