from .tracklet_index import TrackletIndex, rebuild_active_set, rebuild_cropped_clouds, \
    centered_cloud, color_for
