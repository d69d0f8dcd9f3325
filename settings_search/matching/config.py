# config.py — tuned defaults

# Field boosts (overridable per search through SearchOptions)
BOOST_ID = 2.0
BOOST_TITLE = 1.5
BOOST_DESCRIPTION = 1.0

# Fixed field weights
ENUM_WEIGHT = 1.2
TAG_WEIGHT = 1.3
TFIDF_WEIGHT = 0.3

# Result limits
MAX_RESULTS = 50
MIN_SCORE = 0.01
DEFAULT_MATCH_MODE = "fuzzy"

# Contiguous matching
CONTIGUOUS_MIN_PREFIX = 3
PARTIAL_PREFIX_PENALTY = 0.8
CONTIGUOUS_POSITION_PENALTY = 0.2

# Fuzzy (subsequence) matching
FUZZY_COMPACTNESS_WEIGHT = 0.6
FUZZY_RUN_BONUS_STEP = 0.1
FUZZY_MAX_RUN_BONUS = 0.3
FUZZY_POSITION_PENALTY = 0.3
FUZZY_POSITION_WEIGHT = 0.1

# Word-based matching
WORD_SIMILARITY_THRESHOLD = 0.6

# Suggestions
SUGGESTION_MIN_PARTIAL = 2
SUGGESTION_FUZZY_MIN_PARTIAL = 3
SUGGESTION_MAX_DISTANCE = 2
SUGGESTION_MAX_IDF_BOOST = 2.0
SUGGESTION_LIMIT = 10
