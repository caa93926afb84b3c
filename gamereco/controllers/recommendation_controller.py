import logging

from flask import Blueprint, current_app, request, jsonify
from pydantic import ValidationError
from gamereco import SERVICE_EXTENSION_KEY
from gamereco.dtos.recommendation_dtos import (
    CatalogPageRequest,
    PersonalRecommendationRequest,
    TagRecommendationRequest,
)

logger = logging.getLogger(__name__)

reco_bp = Blueprint('recommendations', __name__)


def _service():
    return current_app.extensions[SERVICE_EXTENSION_KEY]


@reco_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health Check
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is healthy
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            games:
              type: integer
              example: 1200
    """
    return jsonify({"status": "ok", "games": _service().repository.count()})

@reco_bp.route('/reco', methods=['POST'])
def recommend_by_tags_route():
    """
    Tag search recommendations
    ---
    tags:
      - Recommendations
    parameters:
      - in: body
        name: body
        required: true
        schema:
          id: TagRecommendationRequest
          properties:
            term:
              type: string
              example: "zelda"
            liked:
              type: array
              items:
                type: string
              example: ["RPG", "오픈 월드"]
            k:
              type: integer
              example: 12
    responses:
      200:
        description: Ranked games with their score components.
        schema:
          type: object
          properties:
            items:
              type: array
              items:
                type: object
      400:
        description: Invalid request data.
    """
    try:
        req_data = TagRecommendationRequest.model_validate_json(request.get_data() or b"{}")
        items = _service().recommend_by_tags(
            term=req_data.term,
            liked=req_data.liked,
            k=req_data.k,
        )
        return jsonify({"items": items})
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False, include_context=False, include_input=False)}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("Tag search failed")
        return jsonify({"error": str(e)}), 500

@reco_bp.route('/personal', methods=['POST'])
def recommend_personal_route():
    """
    Personalized recommendations from liked tags and play history.
    ---
    tags:
      - Recommendations
    parameters:
      - in: body
        name: body
        required: true
        schema:
          id: PersonalRecommendationRequest
        examples:
          default:
            value:
              tags: ["RPG"]
              history:
                - tags: ["RPG", "판타지"]
                  playtime_minutes: 1200
              owned_app_ids: [1245620]
              k: 20
    responses:
      200:
        description: Ranked games, or trending games when no preference data is sent.
        schema:
          type: object
          properties:
            games:
              type: array
              items:
                type: object
      400:
        description: Invalid request data.
    """
    try:
        req_data = PersonalRecommendationRequest.model_validate_json(request.get_data() or b"{}")
        games = _service().recommend_personal(
            term=req_data.term,
            liked_tags=req_data.tags,
            history=req_data.history,
            owned_app_ids=req_data.owned_app_ids,
            k=req_data.k,
        )
        return jsonify({"games": games})
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False, include_context=False, include_input=False)}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("Personal recommendation failed")
        return jsonify({"error": str(e)}), 500

@reco_bp.route('/trending', methods=['GET'])
def trending_route():
    """
    Most trending games
    ---
    tags:
      - Recommendations
    parameters:
      - in: query
        name: k
        type: integer
        description: The number of games to return.
        default: 20
    responses:
      200:
        description: Games ordered by trend signal.
      400:
        description: Invalid k.
    """
    try:
        k = request.args.get('k', type=int)
        games = _service().recommend_trending(k)
        return jsonify({"games": games})
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

@reco_bp.route('/games', methods=['GET'])
def list_games_route():
    """
    Browse the catalog ordered by composite score
    ---
    tags:
      - Games
    parameters:
      - in: query
        name: page
        type: integer
        description: The page number to retrieve.
        default: 1
      - in: query
        name: per_page
        type: integer
        description: The number of games per page.
        default: 15
      - in: query
        name: liked
        type: array
        items:
          type: string
        collectionFormat: multi
        description: Tags used to personalize the ordering.
    responses:
      200:
        description: A paginated list of games.
        schema:
          type: object
          properties:
            page:
              type: integer
            per_page:
              type: integer
            total:
              type: integer
            games:
              type: array
              items:
                type: object
      400:
        description: Invalid pagination parameters.
    """
    try:
        req_data = CatalogPageRequest(
            page=request.args.get('page', 1),
            per_page=request.args.get('per_page'),
            liked=request.args.getlist('liked'),
        )
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False, include_context=False, include_input=False)}), 400

    result = _service().browse_catalog(req_data.page, req_data.per_page, req_data.liked)
    return jsonify(result)

@reco_bp.route('/games/<game_id>', methods=['GET'])
def get_game_route(game_id):
    """
    Get a specific game by its id
    ---
    tags:
      - Games
    parameters:
      - in: path
        name: game_id
        type: string
        required: true
        description: The catalog id (slug) of the game.
    responses:
      200:
        description: The details of the game.
        schema:
          type: object
      404:
        description: Game not found.
    """
    game_details = _service().get_game(game_id)
    if game_details:
        return jsonify(game_details)
    return jsonify({"error": f"Game {game_id} not found"}), 404
