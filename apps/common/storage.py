"""학생 서류를 NCP Object Storage(S3 호환)에 저장 / 삭제하는 어댑터.

업로드 전 파일을 로컬 임시 파일로 옮겨 실제 내용을 검사하고,
성공 / 실패와 관계없이 임시 파일은 항상 삭제.
"""

import logging
import os
import tempfile
from functools import lru_cache

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from PIL import Image, UnidentifiedImageError

from .exceptions import DocumentStoreError, DocumentValidationError
from .utils import generate_unique_filename

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF-"

EXECUTABLE_SIGNATURES = (
    b"\x7fELF",  # ELF
    b"MZ",  # Windows PE
    b"\xfe\xed\xfa\xce",  # Mach-O
    b"\xfe\xed\xfa\xcf",
    b"\xce\xfa\xed\xfe",
    b"\xcf\xfa\xed\xfe",
    b"#!",  # 스크립트
)


def detect_document_type(path):
    """파일 내용으로 MIME 타입을 판별.

    PDF와 이미지만 허용하며, 실행 파일이나 그 외 형식은 거부.

    Args:
        path (str): 검사할 로컬 파일 경로.

    Returns:
        str: 판별된 MIME 타입 (application/pdf 또는 image/*).

    Raises:
        DocumentValidationError: 실행 파일이거나 지원되지 않는 형식인 경우.
    """
    if os.access(path, os.X_OK):
        raise DocumentValidationError("실행 파일은 업로드할 수 없습니다.")

    with open(path, "rb") as f:
        header = f.read(8)

    if header.startswith(EXECUTABLE_SIGNATURES):
        raise DocumentValidationError("실행 파일은 업로드할 수 없습니다.")

    if header.startswith(PDF_SIGNATURE):
        return "application/pdf"

    try:
        with Image.open(path) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise DocumentValidationError()

    return Image.MIME.get(image_format, f"image/{image_format.lower()}")


class DocumentStore:
    """Object Storage 에 서류를 올리고 지우는 클라이언트 래퍼.

    location 은 `{public_base_url}/{bucket}/{object_key}` 형태의 URL.
    """

    def __init__(self, client, bucket_name, folder_name, public_base_url):
        self.client = client
        self.bucket_name = bucket_name
        self.folder_name = folder_name.strip("/")
        self.public_base_url = public_base_url.rstrip("/")

    def location_for(self, object_key):
        return f"{self.public_base_url}/{self.bucket_name}/{object_key}"

    def object_key_for(self, location):
        prefix = f"{self.public_base_url}/{self.bucket_name}/"
        if location.startswith(prefix):
            return location[len(prefix) :]
        return location.lstrip("/")

    def store(self, content, filename):
        """서류를 검사한 뒤 업로드하고 location 을 반환.

        Args:
            content: bytes 또는 chunks()/read() 를 지원하는 업로드 파일 객체.
            filename (str): 원본 파일명.

        Returns:
            str: 업로드된 파일의 location(URL).

        Raises:
            DocumentValidationError: 허용되지 않는 파일 형식인 경우.
            DocumentStoreError: 업로드에 실패한 경우 (재시도 없음).
        """
        filename = os.path.basename(filename or "document")
        _, ext = os.path.splitext(filename)
        fd, temp_path = tempfile.mkstemp(suffix=ext)
        try:
            with os.fdopen(fd, "wb") as temp_file:
                self._write(temp_file, content)

            content_type = detect_document_type(temp_path)
            object_key = f"{self.folder_name}/{generate_unique_filename(filename)}"

            try:
                self.client.upload_file(
                    temp_path,
                    self.bucket_name,
                    object_key,
                    ExtraArgs={"ContentType": content_type},
                )
            except (BotoCoreError, ClientError, S3UploadFailedError) as e:
                logger.error("Error while uploading attachment %s: %s", filename, e)
                raise DocumentStoreError(f"파일 업로드에 실패했습니다: {filename}")

            logger.info("Uploaded document to storage: %s", object_key)
            return self.location_for(object_key)
        finally:
            try:
                os.remove(temp_path)
            except OSError:
                logger.warning("Unable to delete temp file: %s", temp_path)

    def delete(self, location):
        """location 에 해당하는 파일을 삭제. 빈 location 은 무시."""
        if not location:
            return

        object_key = self.object_key_for(location)
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=object_key)
        except (BotoCoreError, ClientError) as e:
            logger.error("Error deleting document from storage %s: %s", object_key, e)
            raise DocumentStoreError(f"파일 삭제에 실패했습니다: {object_key}")

        logger.info("Deleted from storage: %s", object_key)

    @staticmethod
    def _write(temp_file, content):
        if isinstance(content, (bytes, bytearray)):
            temp_file.write(content)
        elif hasattr(content, "chunks"):
            for chunk in content.chunks():
                temp_file.write(chunk)
        else:
            temp_file.write(content.read())


@lru_cache(maxsize=None)
def get_document_store():
    """프로세스당 한 번만 S3 클라이언트를 생성해서 재사용"""
    s3_client = boto3.client(
        "s3",
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_S3_REGION_NAME,
    )
    return DocumentStore(
        client=s3_client,
        bucket_name=settings.AWS_STORAGE_BUCKET_NAME,
        folder_name=settings.DOCUMENT_FOLDER_NAME,
        public_base_url=settings.DOCUMENT_PUBLIC_BASE_URL,
    )
