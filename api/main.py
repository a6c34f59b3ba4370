import logging
import os

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from shared.config import config
from reviewer.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from reviewer.orchestrator import BUSY_NOTICE, ReviewOrchestrator, Stage
from reviewer.parsing import score_label
from reviewer.state import edit, settle
from .llm import get_reviewer
from .models import CodeReviewError, CodeReviewRequest, CodeReviewResponse
from .render import highlight_css, render_review
from .sessions import SessionStore

logger = logging.getLogger(__name__)

UPLOAD_EXTENSIONS = ".js,.jsx,.ts,.tsx,.py,.java,.cpp,.c,.cs,.php,.go,.sql,.txt"
COPY_TARGETS = ("code", "review")

app = FastAPI(title="AI Code Reviewer")

# Mount static files
static_dir = os.path.join(os.path.dirname(__file__), "static")
app.mount("/static", StaticFiles(directory=static_dir), name="static")
templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

sessions = SessionStore()
orchestrator = ReviewOrchestrator()


@app.post(
    "/api/codereview",
    response_model=CodeReviewResponse,
    responses={500: {"model": CodeReviewError}},
)
async def code_review(request: CodeReviewRequest):
    try:
        reviewer = get_reviewer()
        text = await reviewer.generate(request.code, request.system_instruction)
    except Exception:
        logger.exception("Gemini API error")
        return JSONResponse(status_code=500, content={"error": "Failed to generate content"})

    return CodeReviewResponse(text=text)


# --- Review page ---

def _session_id(request: Request) -> str:
    return request.cookies.get(config.SESSION_COOKIE) or sessions.new_id()


def _render(request: Request, session_id: str, state, notices=(), clipboard=None):
    context = {
        "state": state,
        "languages": SUPPORTED_LANGUAGES,
        "notices": [n for n in notices if n is not None],
        "review_html": render_review(state.review),
        "score_label": score_label(state.code_score) if state.code_score is not None else "",
        "clipboard": clipboard,
        "highlight_css": highlight_css(),
        "upload_extensions": UPLOAD_EXTENSIONS,
    }
    response = templates.TemplateResponse(request, "index.html", context)
    response.set_cookie(config.SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _apply_form(state, code: str, language: str):
    state, notice = orchestrator.select_language(state, language)
    return edit(state, code=code), notice


def _store_edit(session_id: str, state, notices):
    """Keep a page edit, or show the running review instead."""
    if sessions.update(session_id, state):
        return state, notices
    return sessions.get(session_id), [BUSY_NOTICE]


@app.get("/", response_class=HTMLResponse)
async def read_index(request: Request):
    session_id = _session_id(request)
    return _render(request, session_id, sessions.get(session_id))


@app.post("/review", response_class=HTMLResponse)
def submit_review(request: Request, code: str = Form(""), language: str = Form(DEFAULT_LANGUAGE)):
    session_id = _session_id(request)
    state, notice = _apply_form(sessions.get(session_id), code, language)
    claimed = []

    def claim(pending):
        won = sessions.update(session_id, pending)
        if won:
            claimed.append(pending)
        return won

    try:
        outcome = orchestrator.review(state, publish=claim)
    except Exception:
        if claimed:
            sessions.save(session_id, settle(state))
        raise

    if claimed:
        sessions.save(session_id, outcome.state)
        shown, notices = outcome.state, [notice, *outcome.notices]
    elif outcome.stage is Stage.REJECTED:
        shown, notices = _store_edit(session_id, outcome.state, [notice, *outcome.notices])
    else:
        shown, notices = sessions.get(session_id), outcome.notices
    return _render(request, session_id, shown, notices)


@app.post("/apply-fix", response_class=HTMLResponse)
def apply_fix(request: Request, code: str = Form(""), language: str = Form(DEFAULT_LANGUAGE)):
    session_id = _session_id(request)
    state, notice = _apply_form(sessions.get(session_id), code, language)
    state, applied = orchestrator.apply_fix(state)
    state, notices = _store_edit(session_id, state, [notice, applied])
    return _render(request, session_id, state, notices)


@app.post("/copy/{target}", response_class=HTMLResponse)
def copy_text(
    request: Request,
    target: str,
    code: str = Form(""),
    language: str = Form(DEFAULT_LANGUAGE),
):
    if target not in COPY_TARGETS:
        raise HTTPException(status_code=404, detail="Nothing to copy here")

    session_id = _session_id(request)
    state, notice = _apply_form(sessions.get(session_id), code, language)
    text, copied = orchestrator.copy(state, target)
    shown, notices = _store_edit(session_id, state, [notice, copied])
    if shown is not state:
        text = None
    return _render(request, session_id, shown, notices, clipboard=text)


@app.post("/upload", response_class=HTMLResponse)
async def upload_file(request: Request, file: UploadFile = File(...)):
    session_id = _session_id(request)
    state = sessions.get(session_id)
    raw = await file.read()
    text = raw.decode("utf-8", errors="replace")
    state, loaded = orchestrator.load_file(state, file.filename or "file", text)
    state, notices = _store_edit(session_id, state, [loaded])
    return _render(request, session_id, state, notices)


def run():
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
