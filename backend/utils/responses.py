from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data=None, message=None, status=http_status.HTTP_200_OK):
    payload = {"success": True}
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    return Response(payload, status=status)


def error_payload(message, code, errors=None):
    payload = {"success": False, "message": message, "code": code}
    if errors is not None:
        payload["errors"] = errors
    return payload
