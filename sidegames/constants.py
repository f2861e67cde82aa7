"""Constants and lookup tables for the side-game settlement engine."""

# Holes in a round; every per-hole sequence is normalised to this length
HOLES = 18

FRONT_NINE = (0, 9)
BACK_NINE = (9, 18)
FULL_ROUND = (0, 18)

DEFAULT_PAR = 4

# USGA-style hole difficulty ranks (1 = hardest, 18 = easiest), 0-based holes
HOLE_HANDICAP_STROKES = [1, 10, 2, 11, 3, 12, 4, 13, 5, 14, 6, 15, 7, 16, 8, 17, 9, 18]

# Baseline quota for Quota games: QUOTA_BASE - handicap
QUOTA_BASE = 36

# Nassau legs: (label, config stake field, start, end) with end exclusive
NASSAU_LEGS = [
    ('Front 9', 'bet_front', *FRONT_NINE),
    ('Back 9', 'bet_back', *BACK_NINE),
    ('Full 18', 'bet_overall', *FULL_ROUND),
]

# Sixes segments: (start, end inclusive, team A seats, team B seats)
SIXES_SEGMENTS = [
    (0, 5, (0, 1), (2, 3)),
    (6, 11, (0, 2), (1, 3)),
    (12, 17, (0, 3), (1, 2)),
]

# Nines point buckets, best to worst
NINES_POINTS = [5, 3, 1]

# Scotch category points
SCOTCH_LOW_BALL_POINTS = 2
SCOTCH_LOW_TOTAL_POINTS = 3

# Dots awarded per achievement
EAGLE_DOTS = 2
BIRDIE_DOTS = 1
SANDY_DOTS = 1
GREENIE_DOTS = 1

# Auto-press trigger: holes down within a nine
AUTO_PRESS_DEFICIT = 2

# Aces & Deuces tie conventions
TIE_POLICY_ALL_PLAY = 'all_play'
TIE_POLICY_CANCEL = 'cancel'

# Payout game tags (appear on Payout.game)
TAG_TAXMAN = 'taxman'
TAG_NASSAU = 'nassau'
TAG_NASSAU_PRESS = 'nassau-press'
TAG_SKINS = 'skins'
TAG_WOLF = 'wolf'
TAG_BBB = 'bingo-bango-bongo'
TAG_SNAKE = 'snake'
TAG_VEGAS = 'vegas'
TAG_CTP = 'ctp'
TAG_TROUBLE = 'trouble'
TAG_ARNIES = 'arnies'
TAG_BANKER = 'banker'
TAG_HEAD_TO_HEAD = 'head-to-head'
TAG_H2H_PRESS = 'h2h-press'
TAG_BEST_BALL = 'best-ball'
TAG_STABLEFORD = 'stableford'
TAG_RABBIT = 'rabbit'
TAG_DOTS = 'dots'
TAG_SIXES = 'sixes'
TAG_NINES = 'nines'
TAG_SCOTCH = 'scotch'
TAG_ACES_DEUCES = 'aces-deuces'
TAG_QUOTA = 'quota'

# Press game tag prefix for head-to-head pairs: h2h-{idA}-{idB}
H2H_PRESS_PREFIX = 'h2h-'
