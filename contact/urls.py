"""
Contact Management URLs

Public contact form endpoints.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('contact', views.contact, name='contact'),
    path('contact/submit', views.ContactSubmitView.as_view(), name='contact-submit'),
    path('contact/test-email', views.test_email, name='contact-test-email'),
]
