from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.scraper_service import ScraperService
from navandex.services.storage_service import StorageService
from navandex.schemas import ScrapeSchema
from navandex.utils.validators import validate_schema
from navandex.utils.decorators import role_required

scraper_bp = Blueprint("scraper", __name__)
upload_bp = Blueprint("upload", __name__)


@scraper_bp.route("/", methods=["POST"])
@jwt_required()
@role_required()
@validate_schema(ScrapeSchema)
def scrape(current_user):
    """Title and image candidates for a product page"""
    result = ScraperService.scrape_product(request.validated_data["url"])
    return jsonify(result), 200


@upload_bp.route("/", methods=["POST"])
@jwt_required()
@role_required()
def upload_file(current_user):
    file = request.files.get("file")
    if not file or not file.filename:
        return jsonify({"error": "No file provided"}), 400

    url = StorageService.upload(file)
    return jsonify({"url": url}), 201


@upload_bp.route("/", methods=["DELETE"])
@jwt_required()
@role_required()
def delete_file(current_user):
    data = request.get_json(silent=True) or {}
    url = data.get("url")
    if not url:
        return jsonify({"error": "No URL provided"}), 400

    StorageService.delete(url)
    return jsonify({"message": "File deleted successfully"}), 200
