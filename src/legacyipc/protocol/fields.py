"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling. The
legacy peer matches names exactly, casing included.
"""

# Envelope fields
TYPE = "type"
DATA = "data"

# Registered message kinds
DIFFICULTY_REQUEST = "DifficultyCalculationRequest"
DIFFICULTY_RESPONSE = "DifficultyCalculationResponse"
