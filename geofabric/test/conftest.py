import matplotlib
matplotlib.use('Agg')
import os
from pathlib import Path
import shutil
import geopandas as gpd
import pytest
from shapely.geometry import LineString, box

# GDA94 / Australian Albers (meters)
albers_crs = 3577


# stuff for handling slow tests
def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow tests"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        # --runslow given in cli: do not skip slow tests
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(scope="session")
def project_root_path():
    filepath = os.path.split(os.path.abspath(__file__))[0]
    return Path(os.path.normpath(os.path.join(filepath, '../../')))


@pytest.fixture(scope="session", autouse=True)
def outdir(project_root_path):
    folder = project_root_path / 'geofabric/test/temp/'
    reset = True
    if reset:
        shutil.rmtree(folder, ignore_errors=True)
        folder.mkdir(parents=True)
    return folder


@pytest.fixture(autouse=True)
def keep_cwd():
    """Reset the working directory after a test.
    """
    wd = os.getcwd()
    yield wd  # provide the fixture value
    os.chdir(wd)


@pytest.fixture(scope='function')
def streams():
    """10 east-west stream segments, each 1 km long;
    3 named Goulburn River."""
    names = ['Goulburn River', 'Broken River', 'Seven Creeks', None,
             'GOULBURN RIVER', 'Delatite River', 'Hughes Creek',
             'goulburn river', 'Sunday Creek', 'King Parrot Creek']
    geoms = [LineString([(0, i * 100), (1000, i * 100)]) for i in range(len(names))]
    return gpd.GeoDataFrame({'HydroID': list(range(1, len(names) + 1)),
                             'Name': names,
                             'geometry': geoms}, crs=albers_crs)


@pytest.fixture(scope='function')
def catchments():
    """5 square catchments, each 1 km2; 2 in the Goulburn."""
    names = ['Upper Goulburn', 'Broken', 'LOWER GOULBURN', 'Ovens', None]
    geoms = [box(i * 1000, 0, (i + 1) * 1000, 1000) for i in range(len(names))]
    return gpd.GeoDataFrame({'CatchID': list(range(1, len(names) + 1)),
                             'CATCHNAME': names,
                             'geometry': geoms}, crs=albers_crs)


@pytest.fixture(scope='function')
def data_dir(tmp_path, streams, catchments):
    """Geofabric data in the shapefile layout."""
    data_dir = tmp_path / 'data'
    (data_dir / 'SH_Network').mkdir(parents=True)
    (data_dir / 'SH_Catchment').mkdir(parents=True)
    streams.to_file(data_dir / 'SH_Network/HR_Streams.shp', engine='fiona')
    catchments.to_file(data_dir / 'SH_Catchment/HR_Catchments.shp', engine='fiona')
    return data_dir


@pytest.fixture(scope='function')
def geopackage_data_dir(tmp_path, streams, catchments):
    """Geofabric data in a single multi-layer GeoPackage."""
    data_dir = tmp_path / 'gpkg_data'
    data_dir.mkdir()
    gpkg = data_dir / 'SH_Network.gpkg'
    waterbodies = catchments.copy()
    waterbodies['geometry'] = waterbodies.buffer(-100)
    waterbodies.to_file(gpkg, layer='Waterbody', driver='GPKG', engine='fiona')
    catchments.to_file(gpkg, layer='HR_Catchments', driver='GPKG', engine='fiona')
    streams.to_file(gpkg, layer='HR_Network', driver='GPKG', engine='fiona')
    return data_dir
