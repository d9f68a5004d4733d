import pytest
from geofabric.plots import plot_overview


def test_plot_overview(streams, catchments, tmp_path):
    outfile = plot_overview(streams, catchments, filename=tmp_path / 'overview.png')
    assert outfile.exists()
    # streams in a different CRS are reprojected to the catchment CRS
    outfile = plot_overview(streams.to_crs(4283), catchments,
                            filename=tmp_path / 'overview2.png', title='test')
    assert outfile.exists()


def test_plot_overview_single_layer(streams, tmp_path):
    outfile = plot_overview(streams=streams, filename=tmp_path / 'streams.png')
    assert outfile.exists()
    with pytest.raises(ValueError):
        plot_overview(filename=tmp_path / 'nothing.png')
