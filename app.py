from flask import Flask, request, render_template, session, redirect, url_for, jsonify, make_response, abort
from flask_session import Session
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect, CSRFError
from werkzeug.exceptions import HTTPException
import os
import sys
import secrets
import tempfile
import bleach
import html
import redis
from datetime import datetime
from dotenv import load_dotenv

import database
from content import (
    APP_NAME, APP_VERSION, BRANCHING_CASES, CONDITIONS, FOOTER_DISCLAIMER, GLOSSARY, HOME_MODULES,
    LEARNING_TOOLS, NAVIGATION, QUESTIONS, search_glossary,
)
from preferences import PreferenceStore, RedisBackend, SQLiteBackend, create_backend
from progress import CaseSimulation, QuizSession
from projector import difficulty_badge
from scenarios import ALL_CATEGORIES
from scoring import CALCULATORS
from selection import OutOfRange, SelectionController

# Load environment variables from .env file
load_dotenv()

TESTING = os.getenv('TESTING', 'false').lower() == 'true'

app = Flask(__name__)
app.secret_key = os.getenv('FLASK_SECRET_KEY', secrets.token_hex(32))

# Server-side sessions in Redis when REDIS_URL is set, filesystem otherwise
redis_url = os.getenv('REDIS_URL', '')
redis_client = None
if redis_url:
    try:
        redis_client = redis.from_url(
            redis_url,
            decode_responses=False,  # Keep binary for Flask-Session compatibility
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30
        )
        redis_client.ping()
        print(f"[REDIS] Successfully connected to Redis at {redis_url.split('@')[-1]}")  # Hide credentials in logs
        app.config['SESSION_TYPE'] = 'redis'
        app.config['SESSION_REDIS'] = redis_client
    except (redis.ConnectionError, redis.TimeoutError) as e:
        print(f"[WARNING] Redis connection failed: {e}")
        print("[WARNING] Falling back to filesystem sessions (not recommended for production)")
        redis_client = None

if redis_client is None:
    app.config['SESSION_TYPE'] = 'filesystem'
    app.config['SESSION_FILE_DIR'] = os.path.join(tempfile.gettempdir(), 'emergency-master-sessions')

app.config['SESSION_PERMANENT'] = True
app.config['PERMANENT_SESSION_LIFETIME'] = 3600  # 1 hour
app.config['SESSION_USE_SIGNER'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SECURE'] = os.getenv('FLASK_ENV') == 'production' and os.getenv('FORCE_HTTPS', 'false').lower() == 'true'
Session(app)

# Initialize CSRF protection
csrf = CSRFProtect(app)
app.config['WTF_CSRF_TIME_LIMIT'] = None  # Don't expire CSRF tokens
app.config['WTF_CSRF_SSL_STRICT'] = False  # Allow CSRF on HTTP (behind reverse proxy)

# Initialize rate limiter
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    default_limits=[os.getenv("RATE_LIMIT", "200 per minute")],
    storage_uri="memory://",
    enabled=not TESTING
)

# ====== Security Functions ======

def sanitize_user_query(query):
    """Sanitize user query input - strip all HTML tags.

    bleach escapes &, < and > in the text it keeps; undo that so the search
    matches what was typed. Templates escape the query again on output.
    """
    if not query:
        return ""
    return html.unescape(bleach.clean(query, tags=[], strip=True)).strip()

# ====== Logging Configuration ======

import logging
from logging.handlers import RotatingFileHandler

def setup_logging():
    """Configure logging for the application"""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file = os.getenv("LOG_FILE", "")

    logger = logging.getLogger("emergency_master")
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler (always enabled)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Configure Flask app logger
    app.logger.handlers = logger.handlers
    app.logger.setLevel(logger.level)

    return logger

logger = setup_logging()

logger.info("=" * 60)
logger.info(f"{APP_NAME} Application Starting")
logger.info(f"Environment: {os.getenv('FLASK_ENV', 'production')}")
logger.info(f"Log Level: {os.getenv('LOG_LEVEL', 'INFO')}")
logger.info(f"Rate Limit: {os.getenv('RATE_LIMIT', '200 per minute')} (enabled: {not TESTING})")
logger.info(f"Session Backend: {app.config['SESSION_TYPE']}")
logger.info("=" * 60)

# ====== Theme Preference ======

preference_store = PreferenceStore(
    create_backend(os.getenv("PREFERENCES_BACKEND", "sqlite"), redis_client=redis_client)
)

def apply_theme(theme):
    """Reflect the theme on the root <html> element of every page"""
    app.jinja_env.globals['html_class'] = 'dark' if preference_store.is_dark else ''
    logger.info(f"Theme applied: {theme}")

preference_store.on_change(apply_theme)

@app.context_processor
def inject_layout():
    """Layout values shared by every template"""
    return {
        "app_name": APP_NAME,
        "app_version": APP_VERSION,
        "navigation": NAVIGATION,
        "footer_disclaimer": FOOTER_DISCLAIMER,
        "current_year": datetime.now().year,
        "active_endpoint": request.endpoint,
        "theme": preference_store.get(),
    }

# Request logging middleware
@app.before_request
def log_request():
    """Log incoming requests"""
    logger.info(f"{request.method} {request.path} from {request.remote_addr}")

@app.after_request
def log_response(response):
    """Log outgoing responses"""
    logger.info(f"{request.method} {request.path} - Status: {response.status_code}")
    return response

@app.errorhandler(CSRFError)
def handle_csrf_error(e):
    """Handle CSRF token errors with helpful message"""
    logger.warning(f"CSRF error: {str(e)}")

    # For AJAX requests, return JSON error instead of redirect
    is_ajax = request.headers.get('X-Requested-With') == 'XMLHttpRequest'
    if is_ajax:
        return jsonify({
            "status": "error",
            "message": "Your session has expired. Please reload the page and try again.",
            "error_type": "csrf"
        }), 400

    # For regular requests, redirect to homepage to regenerate session/CSRF token
    return redirect(url_for('index'))

@app.errorhandler(OutOfRange)
def handle_out_of_range(e):
    """A form or API call referenced an item that is not on the page"""
    logger.warning(f"Out of range: {request.method} {request.path} - {e}")
    return jsonify({
        "error": str(e),
        "status": "out_of_range"
    }), 400

@app.errorhandler(404)
def handle_not_found(e):
    """Handle 404 errors - log at WARNING level to avoid log noise from scanners"""
    logger.warning(f"404 Not Found: {request.method} {request.path} from {get_remote_address()}")
    return jsonify({
        "error": "The requested resource was not found.",
        "status": "not_found"
    }), 404

@app.errorhandler(HTTPException)
def handle_http_exception(e):
    """Handle other HTTP exceptions (400, 403, 405, etc.) without logging as errors"""
    logger.info(f"HTTP {e.code}: {request.method} {request.path}")
    return jsonify({
        "error": e.description,
        "status": "http_error"
    }), e.code

@app.errorhandler(Exception)
def log_exception(e):
    """Log unhandled non-HTTP exceptions only"""
    if isinstance(e, HTTPException):
        raise e

    logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
    return jsonify({
        "error": "An internal error occurred. Please try again later.",
        "status": "error"
    }), 500

# ====== Helpers ======

def parse_index(raw, name):
    """Parse a zero-based index from form or query input, 400 on garbage"""
    try:
        return int(raw)
    except (TypeError, ValueError):
        abort(400, description=f"Invalid value for '{name}'")

def no_cache(response):
    """Prevent caching so interactive state is always fresh"""
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response

def render_page(template, **context):
    return no_cache(make_response(render_template(template, **context)))

def redirect_to(endpoint, **values):
    return no_cache(redirect(url_for(endpoint, **values)))

def get_condition(slug):
    condition = CONDITIONS.get(slug)
    if condition is None:
        abort(404)
    return condition

def condition_state(slug):
    """Session state for one condition page (case, pathway step, calculator ticks)"""
    return session.get(f"condition:{slug}") or {}

def save_condition_state(slug, state):
    session[f"condition:{slug}"] = state
    session.modified = True

def load_quiz():
    return QuizSession.from_dict(QUESTIONS, session.get('assessment'))

def save_quiz(quiz):
    session['assessment'] = quiz.to_dict()
    session.modified = True

def load_simulation():
    return CaseSimulation.from_dict(BRANCHING_CASES, session.get('cases'))

def save_simulation(sim):
    session['cases'] = sim.to_dict()
    session.modified = True

def evaluate_calculator(calc, checked_ids):
    """Score ticked criteria, 400 if any id is not a criterion of calc"""
    try:
        return calc.evaluate(checked_ids)
    except KeyError as e:
        abort(400, description=str(e))

# ====== Pages ======

@app.route("/")
def index():
    """Home page - condition modules and learning tools"""
    return render_template("home.html", modules=HOME_MODULES, tools=LEARNING_TOOLS)

@app.route("/<slug>")
def condition_page(slug):
    """Condition module - reference material, case simulator, calculators"""
    condition = get_condition(slug)
    state = condition_state(slug)

    selection = SelectionController.from_dict(condition.cases, state.get("selection"))
    view = condition.project(selection.current)

    pathway = None
    if condition.pathway is not None:
        pathway = SelectionController.from_dict(condition.pathway, state.get("pathway"))

    ticked = state.get("calculators") or {}
    calculators = {
        calc_id: {"calc": CALCULATORS[calc_id],
                  "result": CALCULATORS[calc_id].evaluate(ticked.get(calc_id, []))}
        for calc_id in condition.calculators
    }

    return render_page(
        "condition.html",
        condition=condition,
        selection=selection,
        view=view,
        pathway=pathway,
        calculators=calculators,
    )

@app.route("/<slug>/select", methods=["POST"])
def select_case(slug):
    """Select a case in the condition's simulator"""
    condition = get_condition(slug)
    state = condition_state(slug)
    selection = SelectionController.from_dict(condition.cases, state.get("selection"))
    record = selection.select(parse_index(request.form.get('case'), 'case'))
    logger.info(f"{slug}: selected case {record.id}")
    state["selection"] = selection.to_dict()
    save_condition_state(slug, state)
    return redirect_to('condition_page', slug=slug, _anchor='simulator')

@app.route("/<slug>/pathway", methods=["POST"])
def select_pathway_step(slug):
    """Select a step in the condition's stepper pathway"""
    condition = get_condition(slug)
    if condition.pathway is None:
        abort(404)
    state = condition_state(slug)
    pathway = SelectionController.from_dict(condition.pathway, state.get("pathway"))
    pathway.select(parse_index(request.form.get('step'), 'step'))
    state["pathway"] = pathway.to_dict()
    save_condition_state(slug, state)
    return redirect_to('condition_page', slug=slug, _anchor='pathway')

@app.route("/<slug>/calculator/<calc_id>", methods=["POST"])
def update_calculator(slug, calc_id):
    """Recompute a checkbox score calculator from the ticked criteria"""
    condition = get_condition(slug)
    if calc_id not in condition.calculators:
        abort(404)
    result = evaluate_calculator(CALCULATORS[calc_id], request.form.getlist('criteria'))
    logger.info(f"{slug}: {calc_id} score {result.total} ({result.band.label})")

    state = condition_state(slug)
    calculators = dict(state.get("calculators") or {})
    calculators[calc_id] = result.checked_ids
    state["calculators"] = calculators
    save_condition_state(slug, state)
    return redirect_to('condition_page', slug=slug, _anchor=f'calculator-{calc_id}')

# ====== Case Simulations ======

@app.route("/cases")
def cases():
    """Branching case simulations - case list or the open case"""
    sim = load_simulation()
    return render_page("cases.html", cases=list(BRANCHING_CASES), sim=sim.view(), difficulty_badge=difficulty_badge)

@app.route("/cases/open", methods=["POST"])
def open_case():
    sim = load_simulation()
    sim.open(parse_index(request.form.get('case'), 'case'))
    logger.info(f"Case opened: {sim.current_case.id}")
    save_simulation(sim)
    return redirect_to('cases')

@app.route("/cases/answer", methods=["POST"])
def answer_case_step():
    sim = load_simulation()
    recorded = sim.choose(parse_index(request.form.get('option'), 'option'))
    if not recorded:
        logger.debug("Case step already answered, ignoring choice")
    save_simulation(sim)
    return redirect_to('cases')

@app.route("/cases/next", methods=["POST"])
def next_case_step():
    sim = load_simulation()
    sim.next_step()
    save_simulation(sim)
    return redirect_to('cases')

@app.route("/cases/restart", methods=["POST"])
def restart_case():
    sim = load_simulation()
    sim.restart()
    save_simulation(sim)
    return redirect_to('cases')

@app.route("/cases/back", methods=["POST"])
def back_to_cases():
    sim = load_simulation()
    sim.back_to_cases()
    save_simulation(sim)
    return redirect_to('cases')

# ====== Assessment ======

@app.route("/assessment")
def assessment():
    """Assessment quiz - one question at a time, nothing is scored"""
    quiz = load_quiz()
    return render_page("assessment.html", quiz=quiz.view())

@app.route("/assessment/filter", methods=["POST"])
def filter_assessment():
    category = request.form.get('category') or ALL_CATEGORIES
    if category not in QUESTIONS.categories():
        abort(400, description=f"Unknown category '{sanitize_user_query(category)}'")
    quiz = load_quiz()
    quiz.change_filter(category)
    save_quiz(quiz)
    return redirect_to('assessment')

@app.route("/assessment/answer", methods=["POST"])
def answer_question():
    quiz = load_quiz()
    quiz.choose(parse_index(request.form.get('option'), 'option'))
    save_quiz(quiz)
    return redirect_to('assessment')

@app.route("/assessment/next", methods=["POST"])
def next_question():
    quiz = load_quiz()
    quiz.next()
    save_quiz(quiz)
    return redirect_to('assessment')

@app.route("/assessment/previous", methods=["POST"])
def previous_question():
    quiz = load_quiz()
    quiz.previous()
    save_quiz(quiz)
    return redirect_to('assessment')

@app.route("/assessment/reset", methods=["POST"])
def reset_assessment():
    quiz = load_quiz()
    quiz.reset()
    save_quiz(quiz)
    return redirect_to('assessment')

# ====== Glossary & Settings ======

@app.route("/glossary")
def glossary():
    """Searchable glossary of emergency medicine terms"""
    query = sanitize_user_query(request.args.get('q', ''))
    category = request.args.get('category') or ALL_CATEGORIES
    if category not in GLOSSARY.categories():
        category = ALL_CATEGORIES
    terms = search_glossary(query, category)
    return render_template(
        "glossary.html",
        terms=terms,
        query=query,
        category=category,
        categories=GLOSSARY.categories(),
        total=len(GLOSSARY),
    )

@app.route("/settings")
def settings():
    """Settings - theme toggle, about, disclaimers"""
    return render_page("settings.html")

@app.route("/settings/theme", methods=["POST"])
def toggle_theme():
    theme = preference_store.toggle()
    logger.info(f"Theme toggled to {theme}")
    return redirect_to('settings')

# ====== JSON API ======

@app.route("/api/conditions/<slug>")
@csrf.exempt
def api_condition_case(slug):
    """Projected view of one case of a condition"""
    condition = get_condition(slug)
    selection = SelectionController(condition.cases)
    record = selection.select(parse_index(request.args.get('case', 0), 'case'))
    return jsonify({
        "condition": condition.slug,
        "case": selection.active_index,
        "record": record.to_dict(),
        "view": condition.project(record).to_dict(),
    })

@app.route("/api/calculators/<calc_id>", methods=["POST"])
@csrf.exempt
def api_calculator(calc_id):
    """Evaluate a score calculator from {"checked": [criterion ids]}"""
    calc = CALCULATORS.get(calc_id)
    if calc is None:
        abort(404)
    data = request.get_json(silent=True) or {}
    checked = data.get('checked', [])
    if not isinstance(checked, list) or not all(isinstance(c, str) for c in checked):
        abort(400, description="'checked' must be a list of criterion ids")
    result = evaluate_calculator(calc, checked)
    return jsonify(dict(result.to_dict(), calculator=calc.id, formatted_total=calc.format_total(result.total)))

@app.route("/api/preferences", methods=["GET", "POST"])
@csrf.exempt
def api_preferences():
    """Read or set the theme preference"""
    if request.method == "POST":
        data = request.get_json(silent=True) or {}
        try:
            preference_store.set(data.get('theme'))
        except ValueError as e:
            abort(400, description=str(e))
    return jsonify({"theme": preference_store.get()})

@app.route("/health")
@csrf.exempt  # Health checks don't need CSRF protection
def health_check():
    """Health check endpoint for deployment monitoring"""
    health_status = {
        "status": "healthy",
        "service": "emergency-master",
        "version": APP_VERSION,
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "session_backend": app.config['SESSION_TYPE'],
        "checks": {
            "secret_key": bool(app.secret_key),
            "conditions_loaded": len(CONDITIONS) > 0,
            "questions_loaded": len(QUESTIONS) > 0,
            "cases_loaded": len(BRANCHING_CASES) > 0,
        }
    }

    backend = preference_store.backend
    if isinstance(backend, SQLiteBackend):
        health_status["preferences"] = dict(database.get_database_stats(backend.db_path), backend="sqlite")
    else:
        health_status["preferences"] = {"backend": "redis" if isinstance(backend, RedisBackend) else "memory"}

    # Check if any critical service is missing
    if not all(health_status["checks"].values()):
        health_status["status"] = "degraded"
        return jsonify(health_status), 503

    return jsonify(health_status), 200

@app.route("/api/status")
@csrf.exempt  # Status endpoint doesn't need CSRF protection
def api_status():
    """API status endpoint with the endpoint map"""
    return jsonify({
        "status": "operational",
        "endpoints": {
            "home": "/",
            "conditions": {slug: f"/{slug}" for slug in CONDITIONS},
            "cases": "/cases",
            "assessment": "/assessment",
            "glossary": "/glossary",
            "settings": "/settings",
            "condition_api": "/api/conditions/<slug>?case=N",
            "calculator_api": "/api/calculators/<calc_id>",
            "preferences_api": "/api/preferences",
            "health": "/health"
        },
        "rate_limit": os.getenv("RATE_LIMIT", "200 per minute")
    }), 200

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_ENV") == "development"
    app.run(host="0.0.0.0", port=port, debug=debug)
