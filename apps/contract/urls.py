from django.urls import path
from .views import (
    StoreTransactionView,
    EscrowStatusView,
    VerifyTransactionView,
    ChainJobView,
    ContractInfoView,
)

urlpatterns = [
    path("contracts/tx/", StoreTransactionView.as_view(), name="contract-store-tx"),
    path("contracts/escrow/", EscrowStatusView.as_view(), name="contract-escrow"),
    path("contracts/verify/<str:tx_hash>/", VerifyTransactionView.as_view(), name="contract-verify-tx"),
    path("contracts/jobs/<int:contract_job_id>/", ChainJobView.as_view(), name="contract-chain-job"),
    path("contracts/info/", ContractInfoView.as_view(), name="contract-info"),
]
