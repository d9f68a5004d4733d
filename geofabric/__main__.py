"""Run the Geofabric extraction workflow from the command line."""
import argparse
import sys
from geofabric.workflow import run_workflow


def main(args=None):
    parser = argparse.ArgumentParser(prog='python -m geofabric',
                                     description=('Extract stream geometry and catchment '
                                                  'boundaries from BoM Geofabric data.'))
    parser.add_argument('config_file', nargs='?', default=None,
                        help='Configuration file in yaml format (optional)')
    parser.add_argument('--data-dir', dest='data_dir', default=None)
    parser.add_argument('--output-dir', dest='output_dir', default=None)
    parser.add_argument('--region', default=None)
    args = parser.parse_args(args)
    result = run_workflow(args.config_file, data_dir=args.data_dir,
                          output_dir=args.output_dir, region=args.region)
    # non-zero exit if neither dataset could be extracted
    return 0 if len(result.results) > 0 else 1


if __name__ == '__main__':
    sys.exit(main())
