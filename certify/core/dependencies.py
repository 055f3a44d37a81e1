from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_settings(container: ApplicationContainer = Depends(get_container)):
    return container.settings


def get_session_manager(container: ApplicationContainer = Depends(get_container)):
    return container.session_manager


def get_account_directory(container: ApplicationContainer = Depends(get_container)):
    return container.account_directory


def get_event_catalog(container: ApplicationContainer = Depends(get_container)):
    return container.event_catalog


def get_certificate_registry(container: ApplicationContainer = Depends(get_container)):
    return container.certificate_registry


def get_token_service(container: ApplicationContainer = Depends(get_container)):
    return container.token_service
