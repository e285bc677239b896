from waysim.cache import Cache
from waysim.config import (Config, ConfigError, ReplacementAlgorithm, WayPrediction, WriteHitPolicy,
                           WriteMissPolicy)
from waysim.trace import Access, Kind, TraceError, readTrace
