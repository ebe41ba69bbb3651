import os
import uuid

from .exceptions import DomainValidationError


def generate_unique_filename(filename):
    """원본 파일명 + UUID + 확장자로 파일명 생성하는 함수"""
    name, ext = os.path.splitext(filename)  # 파일명과 확장자 분리
    return f"{name}_{uuid.uuid4()}{ext}"


def parse_optional_int(value, field_name):
    """쿼리 파라미터를 정수로 변환. 값이 없으면 None 반환"""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DomainValidationError(f"{field_name} 값은 숫자여야 합니다.")
