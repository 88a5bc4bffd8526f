import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .apps import APP_CATALOG
from .interpreter import Interpreter
from .intents import normalize_utterance
from .logui import info
from .transcript import Transcript


class CommandRequest(BaseModel):
    text: str


class StateResponse(BaseModel):
    active_app: str | None
    brightness: int
    volume: int


class CommandResponse(BaseModel):
    text: str
    intent: str
    params: dict
    response: str
    action: str
    state: StateResponse


def _norm(s: str | None) -> str:
    return normalize_utterance(s).lower()


def create_app(interpreter: Interpreter | None = None, transcript: Transcript | None = None) -> FastAPI:
    app = FastAPI(title="JARVIS Command API")
    app.state.interpreter = interpreter or Interpreter()
    app.state.transcript = transcript or Transcript()
    # One command at a time; FastAPI runs sync endpoints on a thread pool.
    lock = threading.Lock()

    def _state() -> StateResponse:
        app.state.interpreter.tick()
        return StateResponse(**app.state.interpreter.state.snapshot())

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/apps")
    def apps():
        return [{"name": a.name, "icon": a.icon, "color": a.color} for a in APP_CATALOG]

    @app.get("/state", response_model=StateResponse)
    def state():
        with lock:
            return _state()

    @app.get("/transcript")
    def transcript():
        with lock:
            return [m.to_dict() for m in app.state.transcript.messages()]

    @app.post("/command", response_model=CommandResponse)
    def command(req: CommandRequest):
        text = _norm(req.text)
        if not text:
            raise HTTPException(status_code=400, detail="empty text")

        with lock:
            app.state.interpreter.tick()
            app.state.transcript.add(text, is_user=True)
            outcome = app.state.interpreter.process(text)
            app.state.transcript.add(outcome.response, is_user=False)
            info(f'API command "{text}" -> {outcome.intent.value}')
            return CommandResponse(
                text=text,
                intent=outcome.intent.value,
                params=outcome.params,
                response=outcome.response,
                action=outcome.action,
                state=StateResponse(**app.state.interpreter.state.snapshot()),
            )

    return app
