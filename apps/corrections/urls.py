from django.urls import path

from .views import (
    DataCorrectionApproveView,
    DataCorrectionListView,
    DataCorrectionRejectView,
    DataCorrectionRequestView,
)

urlpatterns = [
    path("admin/hallticket/data-correction/request/", DataCorrectionRequestView.as_view(), name="data-correction-request"),
    path("admin/hallticket/data-correction/requests/", DataCorrectionListView.as_view(), name="data-correction-list"),
    path(
        "admin/hallticket/data-correction/<int:request_id>/approve/",
        DataCorrectionApproveView.as_view(),
        name="data-correction-approve",
    ),
    path(
        "admin/hallticket/data-correction/<int:request_id>/reject/",
        DataCorrectionRejectView.as_view(),
        name="data-correction-reject",
    ),
]
