from django.urls import path

from .views import SubmitEntryView

urlpatterns = [
    path('submit', SubmitEntryView.as_view(), name='submit'),
]
