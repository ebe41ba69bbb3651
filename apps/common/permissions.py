from rest_framework.permissions import BasePermission


class IsActiveAdmin(BasePermission):
    """활성화된 관리자 전용 접근 권한.

    로그인한 사용자 중 is_staff 이면서 is_active 인 관리자만 접근을 허용.

    Attributes:
        message (str): 권한 거부 시 반환할 메시지.
    """

    message = "관리자만 이 작업을 수행할 수 있습니다."

    def has_permission(self, request, view):
        """요청한 사용자가 활성 관리자인지 판단.

        Args:
            request (Request): 요청 객체.
            view: 현재 실행 중인 뷰.

        Returns:
            bool: 접근 권한이 있으면 True, 없으면 False.
        """
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(user.is_active and user.is_staff)
