from django.urls import path

from . import views

urlpatterns = [
    path("", views.orders_collection, name="orders"),
    path("stats/", views.order_stats_view, name="order_stats"),
    path("table/<int:table_id>/", views.orders_by_table, name="orders_by_table"),
    path("<int:order_id>/", views.order_detail, name="order_detail"),
    path("<int:order_id>/status/", views.order_status, name="order_status"),
    path("<int:order_id>/payment/", views.order_payment, name="order_payment"),
]
