import os
from dotenv import load_dotenv

from gamereco.services.recommendation.weights import ScoringWeights

load_dotenv()

class Config:
  """
    Configuration class for the application.
    This class loads environment variables from a .env file and provides access to them.
  """

  FLASK_APP = os.getenv("FLASK_APP", "app.py")
  FLASK_RUN_PORT = int(os.getenv("FLASK_RUN_PORT", 5000))
  FLASK_DEBUG = os.getenv("FLASK_DEBUG", "True").lower() == "true"
  LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

  CATALOG_PATH = os.getenv("CATALOG_PATH", "data/catalog.sample.json")
  CATALOG_LIMIT = int(os.getenv("CATALOG_LIMIT", 5000))

  SCORING_TAG_WEIGHT = float(os.getenv("SCORING_TAG_WEIGHT", 0.6))
  SCORING_TREND_WEIGHT = float(os.getenv("SCORING_TREND_WEIGHT", 0.2))
  SCORING_CRITIC_WEIGHT = float(os.getenv("SCORING_CRITIC_WEIGHT", 0.2))
  SCORING_LIKE_WEIGHT = float(os.getenv("SCORING_LIKE_WEIGHT", 3.0))
  SCORING_HISTORY_WEIGHT = float(os.getenv("SCORING_HISTORY_WEIGHT", 1.0))
  SCORING_TREND_DIVISOR = float(os.getenv("SCORING_TREND_DIVISOR", 5.0))

  DEFAULT_SEARCH_K = int(os.getenv("DEFAULT_SEARCH_K", 12))
  DEFAULT_PERSONAL_K = int(os.getenv("DEFAULT_PERSONAL_K", 20))
  DEFAULT_BROWSE_PER_PAGE = int(os.getenv("DEFAULT_BROWSE_PER_PAGE", 15))
  HISTORY_SAMPLE_SIZE = int(os.getenv("HISTORY_SAMPLE_SIZE", 50))

  @classmethod
  def scoring_weights(cls) -> ScoringWeights:
    """Build the engine weights from the SCORING_* settings."""
    return ScoringWeights(
        tag_weight=cls.SCORING_TAG_WEIGHT,
        trend_weight=cls.SCORING_TREND_WEIGHT,
        critic_weight=cls.SCORING_CRITIC_WEIGHT,
        like_weight=cls.SCORING_LIKE_WEIGHT,
        history_weight=cls.SCORING_HISTORY_WEIGHT,
        trend_divisor=cls.SCORING_TREND_DIVISOR,
    )
