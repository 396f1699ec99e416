from .kitti_loader import KittiProvider, KittiDataset
