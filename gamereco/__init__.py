import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flasgger import Flasgger
from werkzeug.utils import import_string
from gamereco.dtos.recommendation_dtos import (
    CatalogPageRequest,
    PersonalRecommendationRequest,
    TagRecommendationRequest,
)
from gamereco.models import PlayedGame

SERVICE_EXTENSION_KEY = "recommendation_service"

def create_app(config_object="gamereco.config.config.Config", service=None):
  app = Flask(__name__)

  CORS(app)

  # Generate OpenAPI schemas from Pydantic models with Swagger-friendly refs
  def _schema(model):
      return model.model_json_schema(ref_template="#/definitions/{model}")

  pydantic_schemas = {
      "PlayedGame": _schema(PlayedGame),
      "TagRecommendationRequest": _schema(TagRecommendationRequest),
      "PersonalRecommendationRequest": _schema(PersonalRecommendationRequest),
      "CatalogPageRequest": _schema(CatalogPageRequest),
  }

  # Flasgger configuration
  swagger_template = {
      "swagger": "2.0",
      "info": {
          "title": "Game Recommendation API",
          "description": "API for tag search, personalized and trending game recommendations.",
          "version": "1.0.0"
      },
      "basePath": "/api",
      "schemes": [
          "http"
      ],
      "definitions": pydantic_schemas
  }

  Flasgger(app, template=swagger_template)

  config = import_string(config_object) if isinstance(config_object, str) else config_object
  app.config.from_object(config)

  logging.basicConfig(
      level=app.config.get("LOG_LEVEL", "INFO"),
      format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
  )

  if service is None:
    from gamereco.services.recommendation_service import RecommendationService
    service = RecommendationService.from_config(config)
  app.extensions[SERVICE_EXTENSION_KEY] = service

  @app.route('/')
  def index():
    return jsonify({"message": "Welcome to the Game Recommendation API!"})

  from gamereco.routes import api_bp as routes

  app.register_blueprint(routes, url_prefix='/api')

  return app
