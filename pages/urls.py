from django.urls import path

from . import views

app_name = 'pages'

urlpatterns = [
    path('', views.home, name='home'),
    path('submit-guess/', views.submit_guess, name='submit-guess'),
    path('confirmation/', views.confirmation, name='confirmation'),
]
