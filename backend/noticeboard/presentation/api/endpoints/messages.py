"""Message CRUD endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from noticeboard.application.schemas import (
    MessageCreate,
    MessageResponse,
    MessageUpdate,
    PaginatedMessagesResponse,
)
from noticeboard.application.services import MessageService, parse_message_id
from noticeboard.domain.exceptions import EntityNotFoundError, InvalidIdentifierError
from noticeboard.infrastructure.dependencies import get_message_service

router = APIRouter(prefix="/messages", tags=["Messages"])


def _message_id(message_id: str) -> UUID:
    """Path dependency: malformed ids are a 400, not a 404."""
    try:
        return parse_message_id(message_id)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    service: MessageService = Depends(get_message_service),
) -> list[MessageResponse]:
    """Every stored message, expired ones included."""
    messages = await service.list_messages()
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    data: MessageCreate,
    service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    message = await service.create_message(data)
    return MessageResponse.model_validate(message)


@router.get("/active", response_model=list[MessageResponse])
async def list_active_messages(
    service: MessageService = Depends(get_message_service),
) -> list[MessageResponse]:
    """Unexpired messages, most important and newest first."""
    messages = await service.list_active_messages()
    return [MessageResponse.model_validate(m) for m in messages]


@router.get("/paginated", response_model=PaginatedMessagesResponse)
async def list_messages_paginated(
    page: int | None = Query(None, description="1-based page number"),
    page_size: int | None = Query(None, description="Items per page, clamped to 1..100"),
    service: MessageService = Depends(get_message_service),
) -> PaginatedMessagesResponse:
    result = await service.list_active_page(page, page_size)
    return PaginatedMessagesResponse(
        data=[MessageResponse.model_validate(m) for m in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{message_id}", response_model=MessageResponse)
async def get_message(
    message_id: UUID = Depends(_message_id),
    service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    try:
        message = await service.get_message(message_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse.model_validate(message)


@router.put("/{message_id}", response_model=MessageResponse)
async def update_message(
    data: MessageUpdate,
    message_id: UUID = Depends(_message_id),
    service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """Partially update a message: omitted fields keep their value."""
    try:
        message = await service.update_message(message_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse.model_validate(message)


@router.post("/{message_id}/toggle", response_model=MessageResponse)
async def toggle_message(
    message_id: UUID = Depends(_message_id),
    service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """Flip the enabled flag."""
    try:
        message = await service.toggle_message(message_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse.model_validate(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: UUID = Depends(_message_id),
    service: MessageService = Depends(get_message_service),
) -> None:
    try:
        await service.delete_message(message_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
