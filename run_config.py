import logging


LOGGING_LEVEL = logging.INFO
SEED: int = 2018
SAMPLER: str = "ust"
N_SAMPLES: int = 1000
GRID_SHAPE: tuple[int, int] = (12, 12)
N_DISTRICTS: int = 4
N_RECOM_STEPS: int = 20
EPSILON: float = 0.05
