from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

import socketio
import uvicorn
from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .audio import MAX_AUDIO_BYTES, AudioUploadError
from .audio import uploader as audio_uploader
from .config import settings
from .managers.broadcast import Broadcaster
from .managers.words import WordManager
from .schemas import AddCommentRequest, NewWordRequest
from .store import GistStore

logger = logging.getLogger(__name__)

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins='*')

words = WordManager(
    GistStore(
        settings.gist_id,
        settings.gist_token,
        settings.gist_filename,
        api_url=settings.gist_api_url,
    ),
    Broadcaster(sio),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await words.load()
    yield
    close = getattr(words.store, 'aclose', None)
    if close is not None:
        await close()


app = FastAPI(title="Wordshare Server", version="0.1.0", lifespan=lifespan)

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

# REST Endpoints
@app.get('/getWords')
async def get_words():
    # Always re-read so late joiners catch up on what they missed
    return { 'words': await words.list_words() }

@app.post('/uploadAudio')
async def upload_audio(audio: Optional[UploadFile] = File(None)):
    if audio is None:
        return JSONResponse(status_code=400, content={ 'error': 'No audio file' })
    # Read one byte past the cap so oversized payloads never reach the provider
    data = await audio.read(MAX_AUDIO_BYTES + 1)
    if len(data) > MAX_AUDIO_BYTES:
        return JSONResponse(status_code=400, content={ 'error': 'Audio file too large' })
    try:
        url = await audio_uploader.upload(data, audio.filename)
    except AudioUploadError:
        return JSONResponse(status_code=500, content={ 'error': 'Upload failed' })
    return { 'audioUrl': url }

@app.post('/newWord')
async def new_word(req: NewWordRequest):
    entry = await words.create_word(req)
    return { 'task': 'success', 'word': entry }

@app.post('/addComment')
async def add_comment(req: AddCommentRequest):
    comment = await words.add_comment(req)
    if comment is None:
        return JSONResponse(status_code=404, content={ 'task': 'error', 'message': 'Word not found' })
    return { 'task': 'success' }

# Socket.IO Events
@sio.event
async def connect(sid, environ, auth=None):
    logger.info("User connected: %s", sid)

@sio.event
async def disconnect(sid, reason=None):
    logger.info("User disconnected: %s", sid)

# Export ASGI app for uvicorn
application = asgi_app


def run():
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logger.info("Server running on port: %s", settings.port)
    uvicorn.run(application, host=settings.host, port=settings.port)


if __name__ == '__main__':
    run()

# For local running: uvicorn wordshare.main:application --reload --port 3000
