from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_audit_logger(container: ApplicationContainer = Depends(get_container)):
    return container.audit_logger


def get_token_service(container: ApplicationContainer = Depends(get_container)):
    return container.token_service


def get_session_service(container: ApplicationContainer = Depends(get_container)):
    return container.session_service


def get_adoption_service(container: ApplicationContainer = Depends(get_container)):
    return container.adoption_service


def get_user_service(container: ApplicationContainer = Depends(get_container)):
    return container.user_service


def get_pet_service(container: ApplicationContainer = Depends(get_container)):
    return container.pet_service


def get_mock_data_service(container: ApplicationContainer = Depends(get_container)):
    return container.mock_data_service
