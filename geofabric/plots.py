import matplotlib.pyplot as plt
from matplotlib.lines import Line2D


def plot_overview(streams=None, catchments=None, filename='goulburn_overview.png',
                  title='Goulburn River Catchment and Stream Network',
                  figsize=(8, 5.33), dpi=150):
    """Make a map of catchment boundaries with the stream network on top.

    Parameters
    ----------
    streams : GeoDataFrame, optional
        Stream lines.
    catchments : GeoDataFrame, optional
        Catchment polygons. If both streams and catchments are supplied,
        the streams are reprojected to the catchment CRS if needed.
    filename : str or pathlike
        Output image file.
    title : str
    figsize : tuple
        Figure size in inches.
    dpi : int
        Resolution of the output image.

    Returns
    -------
    filename : str or pathlike
    """
    if streams is None and catchments is None:
        raise ValueError('Need streams and/or catchments to plot.')
    if streams is not None and catchments is not None:
        if streams.crs is not None and catchments.crs is not None \
                and streams.crs != catchments.crs:
            streams = streams.to_crs(catchments.crs)
    fig, ax = plt.subplots(figsize=figsize)
    handles = []
    try:
        if catchments is not None and len(catchments) > 0:
            catchments.plot(ax=ax, facecolor='lightblue', edgecolor='blue',
                            linewidth=1.5)
            handles.append(Line2D([0], [0], color='blue', lw=1.5,
                                  label='Catchment Boundary'))
        if streams is not None and len(streams) > 0:
            streams.plot(ax=ax, color='darkblue', linewidth=0.8)
            handles.append(Line2D([0], [0], color='darkblue', lw=0.8,
                                  label='Stream Network'))
        if len(handles) > 0:
            ax.legend(handles=handles, loc='upper right', facecolor='white')
        ax.set_title(title)
        fig.savefig(filename, dpi=dpi)
    finally:
        plt.close(fig)
    return filename
