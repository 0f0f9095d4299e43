MAX_UST_DEGREE: int = 256
RANGE_BUF_SIZE: int = 1 << 16
WEIGHT_BITS: int = 32
RMST_WEIGHTS_PER_NODE: int = 8
RECOM_NODE_REPEATS: int = 500
POP_COL: str = "population"
DISTRICT_COL: str = "district"
POP_UPDATER: str = "population"
CUT_EDGE_UPDATER: str = "cut_edges"
