import sys, argparse
import viser
from kitti_vis import utils
from kitti_vis.errors import DatasetOpenError, FrameReadError
from kitti_vis.session import SessionController, CAMERA_VIEWS
from kitti_vis.visualization.viser_renderer import ViserRenderer, ViserControlPanel
from data_loader import KittiProvider


parser = argparse.ArgumentParser(description='Browse KITTI raw point clouds and tracklets', add_help=False)
parser.add_argument('--help', action='store_true', default=False, help='Produce this help message.')
parser.add_argument('--dataset', type=int, default=None, help='Set the number of the KITTI data set to be used.')
# paths
parser.add_argument('--config_path', type=str, default='configs/config.yaml')
parser.add_argument('--data_folder', type=str, default=None, help='overrides data.root of the config')
parser.add_argument('--port', type=int, default=None, help='overrides viewer.port of the config')


def parse_command_line(argv=None):
    """ --help prints the usage and exits with status 1
    """
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help()
        sys.exit(1)
    return args


def initial_dataset_index(numbers, number):
    """ internal index of the requested drive number, 0 if it is absent or unknown
    """
    if number is None:
        print('Data set was not specified.')
    else:
        index = utils.dataset_index(numbers, number)
        if index is not None:
            print('Using data set {:}.'.format(number))
            return index
        print('Data set {:} is not available.'.format(number))
    if numbers:
        print('Using data set {:}.'.format(numbers[0]))
    return 0


def main(args):
    configs = utils.load_configs(args.config_path)
    if args.data_folder is not None:
        configs['data']['root'] = args.data_folder
    if args.port is not None:
        configs['viewer']['port'] = args.port

    provider = KittiProvider(configs)
    numbers = provider.list_available()
    if not numbers:
        print('Cannot open the initial data set: no data sets under {:}'.format(configs['data']['root']))
        return 1
    dataset_index = initial_dataset_index(numbers, args.dataset)
    try:
        dataset = provider.open(numbers[dataset_index])
        dataset.point_cloud(0)
    except (DatasetOpenError, FrameReadError) as e:
        print('Cannot open the initial data set: {:}'.format(e))
        return 1

    server = viser.ViserServer(host=configs['viewer']['host'], port=configs['viewer']['port'])
    renderer = ViserRenderer(server, point_size=configs['display']['point_size'])
    session = SessionController(provider, renderer, configs)
    session.machine.status = ViserControlPanel(
        server, session.post, len(numbers), CAMERA_VIEWS,
        configs['viewer']['default_view'], session.machine.state.visible)

    session.start(dataset_index, dataset=dataset)

    print('Viewer running on http://localhost:{:}'.format(configs['viewer']['port']))
    try:
        session.run()
    except KeyboardInterrupt:
        pass
    server.stop()
    return 0


def run():
    sys.exit(main(parse_command_line()))


if __name__ == '__main__':
    run()
