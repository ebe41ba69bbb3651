from django.urls import path

from .views import AdminTokenRefreshView, LoginView, MyinfoView

urlpatterns = [
    path("admin/login/", LoginView.as_view(), name="login"),
    path("admin/token-refresh/", AdminTokenRefreshView.as_view(), name="token-refresh"),
    path("admin/myinfo/", MyinfoView.as_view(), name="myinfo"),
]
