"""
Contact message admin URLs, mounted in the ``panel`` namespace.
"""
from django.urls import path
from . import admin_views

urlpatterns = [
    path('messages', admin_views.messages_list, name='messages'),
    path('messages/read/<uuid:id>', admin_views.message_read, name='message-read'),
    path(
        'messages/read-api/<uuid:id>',
        admin_views.MessageReadAPIView.as_view(),
        name='message-read-api'
    ),
    path('messages/delete/<uuid:id>', admin_views.message_delete, name='message-delete'),
    path('send-email-reply', admin_views.SendEmailReplyView.as_view(), name='send-email-reply'),
]
