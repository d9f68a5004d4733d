from setuptools import setup

long_description = \
"""Python package for extracting stream network and catchment boundary data
for a region of interest from the Bureau of Meteorology Geofabric.
"""

setup(name="geofabric",
      description=long_description,
      long_description=long_description,
      license='New BSD',
      platforms='Windows, Mac OS-X, Linux',
      packages=["geofabric"],
      package_data={"geofabric": ["default_config.yml"]},
      install_requires=["numpy",
                        "pandas",
                        "geopandas",
                        "fiona",
                        "gis-utils",
                        "pyyaml",
                        "matplotlib"],
      extras_require={"test": ["pytest", "shapely"]},
      python_requires=">=3.8",
      version="0.1")
