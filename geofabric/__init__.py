__version__ = '0.1'

from geofabric.datasets import DatasetKind, DatasetSpec, get_dataset_spec
from geofabric.exceptions import (DatasetNotFoundError, ExportError,
                                  GeofabricError, MalformedSourceError)
from geofabric.extract import (extract_catchment_boundaries, extract_dataset,
                               extract_stream_geometry)
from geofabric.filtering import filter_by_region
from geofabric.gis import locate, resolve_layer, resolve_source
from geofabric.stats import summarize
from geofabric.workflow import check_geofabric_data, run_workflow
