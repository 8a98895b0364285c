# server.py
from contextlib import asynccontextmanager
from typing import List, Optional
import logging
import os
import sys

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
import uvicorn

# MongoDB & Environment
from dotenv import load_dotenv

from mongo_connection import MONGO_COLLECTION, connect
from todo_exceptions import InvalidTodoId, StoreError, TodoNotFound
from todo_store import TodoStore

load_dotenv()

logger = logging.getLogger(__name__)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4242"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]


# Todo item schema
class TodoItem(BaseModel):
    # no coercion: "yes" or 1 is not a bool, 5 is not a string
    model_config = ConfigDict(strict=True)

    # accepted so clients may echo records back; the store always assigns ids
    id: Optional[str] = None
    text: str = ""
    completed: bool = False


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


router = APIRouter()


# API Routes
@router.get("/")
async def list_todos(store: TodoStore = Depends(get_store)) -> List[dict]:
    try:
        return await store.list_all()
    except StoreError as e:
        logger.error("Listing todos failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", status_code=201)
async def create_todo(todo: TodoItem, store: TodoStore = Depends(get_store)) -> dict:
    try:
        return await store.insert(text=todo.text, completed=todo.completed)
    except StoreError as e:
        logger.error("Creating todo failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{todo_id}")
async def get_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> dict:
    try:
        return await store.find_by_id(todo_id)
    except InvalidTodoId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TodoNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except StoreError as e:
        logger.error("Fetching todo %s failed: %s", todo_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{todo_id}")
async def update_todo(todo_id: str, todo: TodoItem, store: TodoStore = Depends(get_store)) -> dict:
    try:
        return await store.update_by_id(todo_id, text=todo.text, completed=todo.completed)
    except InvalidTodoId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TodoNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except StoreError as e:
        logger.error("Updating todo %s failed: %s", todo_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(todo_id: str, store: TodoStore = Depends(get_store)):
    try:
        await store.delete_by_id(todo_id)
    except InvalidTodoId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TodoNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except StoreError as e:
        logger.error("Deleting todo %s failed: %s", todo_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


async def malformed_body_handler(request: Request, exc: RequestValidationError):
    """Bodies that don't decode into a todo are a 400, not FastAPI's 422"""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


def create_app(store: Optional[TodoStore] = None) -> FastAPI:
    """Build the FastAPI app.

    With no ``store`` the app connects to MongoDB on startup and a failed
    connection aborts startup. Passing a store skips the connection, which is
    how the tests run against an in-memory store.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is not None:
            yield
            return
        try:
            client, db = await connect()
        except StoreError as e:
            logger.critical("Could not connect to MongoDB: %s", e)
            raise
        app.state.store = TodoStore(db[MONGO_COLLECTION], client=client)
        try:
            yield
        finally:
            app.state.store.close()
            app.state.store = None

    # every GET /<x> belongs to get_todo, so the docs routes stay off
    app = FastAPI(
        title="Todo API",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, malformed_body_handler)
    app.include_router(router)
    return app


# FastAPI app
app = create_app()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
