# Clamping of the navigation indices
# Mapping between the external drive numbers and the internal data set indices
from ..errors import IndexOutOfRange


__all__ = ['clamp_index', 'clamp_tracklet_index', 'dataset_index', 'dataset_number']


def clamp_index(value, count):
    """ clamp value into [0, count - 1]
    """
    if count <= 0:
        raise IndexOutOfRange('cannot clamp {:} into an empty range'.format(value))
    if value >= count:
        value = count - 1
    if value < 0:
        value = 0
    return value


def clamp_tracklet_index(value, active_num):
    """ None when no tracklet is active, otherwise value clamped into [0, active_num - 1]
    """
    if active_num == 0:
        return None
    if value is None:
        value = 0
    return clamp_index(value, active_num)


def dataset_index(numbers, number):
    """ internal index of an external drive number, None if the number is not available
    """
    if number in numbers:
        return numbers.index(number)
    return None


def dataset_number(numbers, index):
    return numbers[index]
