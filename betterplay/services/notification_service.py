import logging

import requests
from flask import current_app

from betterplay.models import User

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Hands notifications off to the push dispatcher.

    Delivery itself lives outside this service: when NOTIFIER_WEBHOOK_URL is
    configured the payload is POSTed there, otherwise it is only logged.
    A failed dispatch never fails the request that triggered it.
    """

    @staticmethod
    def send_to_user(user_id, title, body, data=None, notification_type='general'):
        return NotificationService.send_to_users([user_id], title, body, data, notification_type)

    @staticmethod
    def send_to_users(user_ids, title, body, data=None, notification_type='general'):
        user_ids = sorted(set(user_ids))
        if not user_ids:
            return False

        payload = {
            'userIds': user_ids,
            'title': title,
            'body': body,
            'type': notification_type,
            'data': data or {}
        }
        logger.info("Notify %s: %s", user_ids, title)

        webhook_url = current_app.config.get('NOTIFIER_WEBHOOK_URL')
        if not webhook_url:
            return False

        try:
            response = requests.post(webhook_url, json=payload, timeout=10)
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            logger.warning("Notification dispatch failed for %s: %s", user_ids, e)
            return False

    @staticmethod
    def admin_ids():
        return [u.id for u in User.query.filter_by(role='admin').all()]
