import io
from unittest.mock import patch, MagicMock

import pytest
import requests
from bs4 import BeautifulSoup
from botocore.exceptions import ClientError

from navandex.services.scraper_service import (
    ScraperService,
    extract_title,
    extract_images,
    is_valid_image_url,
)
from navandex.services.storage_service import StorageService
from navandex.exceptions import ExternalServiceError, ServiceError

PRODUCT_PAGE = """
<html>
  <head>
    <title>Shop | Boots</title>
    <meta property="og:title" content="Leather Boots">
    <meta property="og:image" content="/media/boots.jpg?v=2">
  </head>
  <body>
    <h1>Boots heading</h1>
    <div class="product-image"><img src="https://cdn.shop.test/side.png"></div>
  </body>
</html>
"""


def fake_response(text="", status=200):
    response = MagicMock()
    response.text = text
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(str(status))
    return response


class TestScraperParsing:
    """Test title and image extraction"""

    def test_og_title_first(self):
        soup = BeautifulSoup(PRODUCT_PAGE, "html.parser")
        assert extract_title(soup) == "Leather Boots"

    def test_falls_back_to_h1_then_title(self):
        soup = BeautifulSoup("<html><head><title> Plain </title></head><body><h1>Heading</h1></body></html>", "html.parser")
        assert extract_title(soup) == "Heading"

        soup = BeautifulSoup("<html><head><title> Plain </title></head></html>", "html.parser")
        assert extract_title(soup) == "Plain"

    def test_meta_images_resolved_to_absolute(self):
        soup = BeautifulSoup(PRODUCT_PAGE, "html.parser")

        images = extract_images(soup, "https://shop.test/p/boots")
        assert images == ["https://shop.test/media/boots.jpg?v=2"]

    def test_product_selectors_when_no_meta(self):
        soup = BeautifulSoup(
            '<div class="product-gallery"><img src="a.webp"><img src="b.gif"><img src="a.webp"></div>',
            "html.parser",
        )

        assert extract_images(soup, "https://shop.test/x/") == ["https://shop.test/x/a.webp"]

    @pytest.mark.parametrize(
        "url, valid",
        [
            ("https://a.test/x.JPG", True),
            ("https://a.test/x.jpeg?w=300", True),
            ("https://a.test/x.svg", False),
            ("https://a.test/image", False),
        ],
    )
    def test_image_extensions(self, url, valid):
        assert is_valid_image_url(url) is valid


class TestScraperRoute:
    def test_scrape(self, client, customer_headers):
        with patch("navandex.services.scraper_service.requests.get",
                   return_value=fake_response(PRODUCT_PAGE)) as get:
            response = client.post(
                "/api/scraper/", headers=customer_headers, json={"url": "https://shop.test/p/boots"}
            )

        assert response.status_code == 200
        assert response.json["title"] == "Leather Boots"
        assert response.json["images"] == ["https://shop.test/media/boots.jpg?v=2"]
        assert "User-Agent" in get.call_args.kwargs["headers"]

    def test_upstream_failure(self, client, customer_headers):
        with patch("navandex.services.scraper_service.requests.get",
                   return_value=fake_response(status=503)):
            response = client.post(
                "/api/scraper/", headers=customer_headers, json={"url": "https://shop.test/p/1"}
            )

        assert response.status_code == 502
        assert response.json["error"] == "Failed to scrape product information"

    def test_invalid_url(self, client, customer_headers):
        response = client.post("/api/scraper/", headers=customer_headers, json={"url": "not a url"})
        assert response.status_code == 400

    def test_try_scrape_swallows_failures(self, app):
        with patch("navandex.services.scraper_service.requests.get",
                   side_effect=requests.exceptions.ConnectionError("down")):
            assert ScraperService.try_scrape("https://shop.test") == {"title": "", "images": []}


class TestUpload:
    """Test S3 uploads with a mocked client"""

    def test_upload(self, app, client, customer_headers):
        s3 = MagicMock()
        with patch("navandex.services.storage_service.boto3.client", return_value=s3):
            response = client.post(
                "/api/upload/",
                headers=customer_headers,
                data={"file": (io.BytesIO(b"\x89PNG"), "My Photo.PNG")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 201
        url = response.json["url"]
        prefix = f"{app.config['STORAGE_PUBLIC_URL']}/{app.config['STORAGE_BUCKET']}/"
        assert url.startswith(prefix)
        assert url.endswith("-my-photo.png")

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["ACL"] == "public-read"
        assert kwargs["CacheControl"] == "max-age=31536000"
        assert kwargs["ContentType"] == "image/png"
        assert kwargs["Body"] == b"\x89PNG"

    def test_jpg_uses_jpeg_content_type(self, client, customer_headers):
        s3 = MagicMock()
        with patch("navandex.services.storage_service.boto3.client", return_value=s3):
            response = client.post(
                "/api/upload/",
                headers=customer_headers,
                data={"file": (io.BytesIO(b"\xff\xd8"), "parcel.jpg")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 201
        assert s3.put_object.call_args.kwargs["ContentType"] == "image/jpeg"

    def test_upload_without_file(self, client, customer_headers):
        response = client.post("/api/upload/", headers=customer_headers, data={})
        assert response.status_code == 400

    def test_upload_rejects_non_images(self, client, customer_headers):
        response = client.post(
            "/api/upload/",
            headers=customer_headers,
            data={"file": (io.BytesIO(b"x"), "script.exe")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400

    def test_storage_failure(self, client, customer_headers):
        s3 = MagicMock()
        s3.put_object.side_effect = ClientError({"Error": {"Code": "500"}}, "PutObject")
        with patch("navandex.services.storage_service.boto3.client", return_value=s3):
            response = client.post(
                "/api/upload/",
                headers=customer_headers,
                data={"file": (io.BytesIO(b"x"), "a.jpg")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 502

    def test_delete(self, app, client, customer_headers):
        s3 = MagicMock()
        url = StorageService.public_url("123-abc-photo.png")
        with patch("navandex.services.storage_service.boto3.client", return_value=s3):
            response = client.delete("/api/upload/", headers=customer_headers, json={"url": url})

        assert response.status_code == 200
        s3.delete_object.assert_called_once_with(
            Bucket=app.config["STORAGE_BUCKET"], Key="123-abc-photo.png"
        )

    def test_delete_requires_url(self, client, customer_headers):
        response = client.delete("/api/upload/", headers=customer_headers, json={})
        assert response.status_code == 400

    def test_split_foreign_url(self, app):
        with pytest.raises(ServiceError):
            StorageService.split_url("https://elsewhere.test/bucket/key.png")

    def test_split_other_bucket(self, app):
        url = f"{app.config['STORAGE_PUBLIC_URL']}/someone-elses-bucket/key.png"
        with pytest.raises(ServiceError):
            StorageService.split_url(url)

    def test_delete_other_bucket_never_reaches_storage(self, app, client, customer_headers):
        s3 = MagicMock()
        url = f"{app.config['STORAGE_PUBLIC_URL']}/someone-elses-bucket/key.png"
        with patch("navandex.services.storage_service.boto3.client", return_value=s3):
            response = client.delete("/api/upload/", headers=customer_headers, json={"url": url})

        assert response.status_code == 400
        s3.delete_object.assert_not_called()
