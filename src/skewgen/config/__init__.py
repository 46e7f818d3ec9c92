from skewgen.config.loader import load_cluster_config

__all__ = ["load_cluster_config"]
