"""
URL patterns for Tallyman.

Usage in the project urls.py:
    path('api/stocks/', include('tallyman.urls')),
"""

from django.urls import path

from tallyman import views

app_name = 'tallyman'

urlpatterns = [
    path('batches/', views.batches, name='batches'),
    path('batches/<int:batch_id>/', views.batch_detail, name='batch-detail'),
    path('batches/<int:batch_id>/export/', views.batch_export, name='batch-export'),
]
