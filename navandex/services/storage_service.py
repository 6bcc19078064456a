import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from navandex.exceptions import ExternalServiceError, ServiceError
from navandex.utils.helpers import storage_key, allowed_file

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif"}
CONTENT_SUBTYPES = {"jpg": "jpeg"}


class StorageService:
    """Uploads to S3 compatible object storage"""

    @staticmethod
    def client():
        config = current_app.config
        return boto3.client(
            "s3",
            region_name=config["STORAGE_REGION"],
            endpoint_url=config["STORAGE_ENDPOINT"],
            aws_access_key_id=config["STORAGE_ACCESS_KEY"],
            aws_secret_access_key=config["STORAGE_SECRET_KEY"],
        )

    @staticmethod
    def public_url(key: str) -> str:
        config = current_app.config
        return f"{config['STORAGE_PUBLIC_URL'].rstrip('/')}/{config['STORAGE_BUCKET']}/{key}"

    @staticmethod
    def upload(file_storage) -> str:
        filename = file_storage.filename or ""
        if not allowed_file(filename, IMAGE_EXTENSIONS):
            raise ServiceError("Unsupported file type")

        key = storage_key(filename)
        extension = key.rsplit(".", 1)[1]
        content_type = f"image/{CONTENT_SUBTYPES.get(extension, extension)}"
        try:
            StorageService.client().put_object(
                Bucket=current_app.config["STORAGE_BUCKET"],
                Key=key,
                Body=file_storage.read(),
                ContentType=content_type,
                ACL="public-read",
                CacheControl="max-age=31536000",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {filename} failed: {e}")
            raise ExternalServiceError("Failed to upload file to storage")

        logger.info(f"Uploaded {key}")
        return StorageService.public_url(key)

    @staticmethod
    def split_url(url: str):
        """Return (bucket, key) for a URL produced by ``public_url``"""
        prefix = current_app.config["STORAGE_PUBLIC_URL"].rstrip("/") + "/"
        if not url.startswith(prefix):
            raise ServiceError("URL does not belong to the storage bucket")
        bucket, _, key = url[len(prefix):].partition("/")
        if not key or bucket != current_app.config["STORAGE_BUCKET"]:
            raise ServiceError("URL does not belong to the storage bucket")
        return bucket, key

    @staticmethod
    def delete(url: str):
        bucket, key = StorageService.split_url(url)
        try:
            StorageService.client().delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Delete of {url} failed: {e}")
            raise ExternalServiceError("Failed to delete file from storage")
