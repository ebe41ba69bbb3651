import logging

from celery import shared_task

from . import services

logger = logging.getLogger(__name__)


@shared_task
def close_stale_rejections():
    """반려 후 기간이 지난 학생 CLOSED 처리 (Celery beat 에서 매일 실행)"""
    closed = services.close_stale_rejections()
    logger.info("close_stale_rejections finished: %s closed", closed)
    return closed
