from typing import Dict
import logging

logger = logging.getLogger("sms_reactor.endpoints")


class _EndpointManager:
    """
    A private helper class to manage and construct API endpoints.
    This is the single source of truth for all relative API paths. Its
    responsibility is strictly limited to path construction; the base URL and
    the ``.json`` suffix are added by the command executor.
    """

    def __init__(self):
        self._endpoint_templates: Dict[str, str] = {
            # === Signatures ===
            'list_signatures': 'signatures',
            'create_signature': 'signatures',
            'get_signature': 'signatures/{signature_id}',

            # === Messages ===
            'send_message': 'messages',
            'get_message': 'messages/{message_id}',
            'get_message_status': 'messages/{message_id}/status',
            'get_message_parts': 'messages/parts',

            # === User ===
            'get_user': 'user',

            # === Mailings ===
            'create_mailing': 'mailings',
            'get_mailing': 'mailings/{mailing_id}',
            'get_mailing_status': 'mailings/{mailing_id}/status',
            'add_mailing_phones': 'mailings/{mailing_id}/phones',
            'list_mailing_messages': 'mailings/{mailing_id}/phones',
            'start_mailing': 'mailings/{mailing_id}/start',
            'stop_mailing': 'mailings/{mailing_id}/stop',
            'abort_mailing': 'mailings/{mailing_id}/abort',
        }

    def build_endpoint(self, key: str, **kwargs) -> str:
        """
        Returns the relative path for an operation, e.g. ``mailings/5/phones``.

        Path arguments (``signature_id``, ``message_id``, ``mailing_id``) are
        substituted into the template. The result carries no leading slash and
        no ``.json`` suffix.
        """
        template = self._endpoint_templates.get(key)
        if template is None:
            logger.error(f"Unknown API operation '{key}'; known: {sorted(self._endpoint_templates)}")
            raise KeyError(f"Unknown API operation '{key}'")
        return template.format(**kwargs)
