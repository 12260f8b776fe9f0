"""
Flask Web Application for the PERMA Profiler

Simple web interface: one question at a time with a rating slider and
a reflection box, Previous/Next/Finish navigation, and a result page.
"""

from flask import Flask, render_template, request, jsonify
import logging
import os
import threading

from backend.commands import (
    StartTest, UpdateAnswer, NextQuestion, PreviousQuestion, FinishTest
)
from backend.core.question_catalog import QuestionCatalog, DEFAULT_QUESTIONS_PATH
from backend.core.scoring_engine import ScoringEngine
from backend.core.template_renderer import TemplateRenderer
from backend.core.profiler_session import ProfilerSession
from backend.persistence import ResultPersistence
from backend.results import IllegalCommand, TestResult
from backend.settings import ProfilerSettings, load_settings, save_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
app.config['QUESTIONS_PATH'] = os.environ.get('PERMA_QUESTIONS_PATH', str(DEFAULT_QUESTIONS_PATH))
app.config['SETTINGS_PATH'] = os.environ.get('PERMA_SETTINGS_PATH', 'data/settings.json')
app.config['RESULTS_DIR'] = os.environ.get('PERMA_RESULTS_DIR', 'outputs/results')

# State for the current test (single respondent)
current_test = {
    'session': None,
    'saved_path': None,
}

# Loaded once at startup, validated before any session can start
catalog = None

# The dev server is threaded; commands for the test run one at a time
session_lock = threading.Lock()


def initialize_catalog():
    """Load and validate the question catalog (called once at startup)"""
    global catalog

    if catalog is None:
        logger.info(f"Loading question catalog from {app.config['QUESTIONS_PATH']}")
        catalog = QuestionCatalog.from_file(app.config['QUESTIONS_PATH'])

    return catalog


def reset_state():
    """Drop the current test and cached catalog"""
    global catalog
    catalog = None
    current_test['session'] = None
    current_test['saved_path'] = None


def current_settings() -> ProfilerSettings:
    return load_settings(app.config['SETTINGS_PATH'])


def create_new_session():
    """Create new test session with explicit collaborators"""
    questions = initialize_catalog()
    settings = current_settings()

    session = ProfilerSession(
        catalog=questions,
        scoring_engine=ScoringEngine(questions),
        renderer=TemplateRenderer(questions),
        template=settings.result_template
    )

    current_test['session'] = session
    current_test['saved_path'] = None

    logger.info(f"New test session created: {session.session_id}")
    return session


def step_response(outcome):
    """Translate a session outcome into a JSON response"""
    if isinstance(outcome, IllegalCommand):
        return jsonify({
            'success': False,
            'error': outcome.reason,
            'command': outcome.command_type
        }), 400

    return jsonify({
        'success': True,
        'finished': False,
        'step': outcome.to_dict()
    })


def dispatch(session, command):
    """Run one command against the session under the session lock"""
    with session_lock:
        return session.handle(command)


def active_session():
    session = current_test['session']
    if session is None:
        return None, (jsonify({'success': False, 'error': 'No active test'}), 400)
    return session, None


def persist_result(result: TestResult, settings: ProfilerSettings):
    """
    Save result document per settings.

    Returns:
        str or None: Path written, None when file creation is disabled

    Raises:
        OSError: If the write fails
    """
    if not settings.create_result_file:
        logger.info("Result file creation disabled, showing result only")
        return None

    persistence = ResultPersistence(app.config['RESULTS_DIR'])
    path = persistence.save_result(result.document, settings, result.completed_at)
    current_test['saved_path'] = str(path)
    return str(path)


@app.route('/')
def index():
    """Main page"""
    try:
        show_launcher = current_settings().show_ribbon_icon
    except ValueError as e:
        logger.error(f"Invalid settings file: {e}")
        show_launcher = True
    return render_template('index.html', show_launcher=show_launcher)


@app.route('/api/start', methods=['POST'])
def start_test():
    """Start new test"""
    try:
        session = create_new_session()
        outcome = dispatch(session, StartTest())

        response = step_response(outcome)
        if isinstance(outcome, IllegalCommand):
            return response

        payload = response.get_json()
        payload['session_id'] = session.session_id
        return jsonify(payload)

    except Exception as e:
        logger.error(f"Error starting test: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/answer', methods=['POST'])
def submit_answer():
    """
    Update score and/or reflection.

    The body names the question the answer was given for (question_id);
    without it the answer goes to the current question.
    """
    try:
        session, error = active_session()
        if error:
            return error

        data = request.get_json(silent=True) or {}
        outcome = dispatch(session, UpdateAnswer(
            score=data.get('score'),
            reflection=data.get('reflection'),
            question_id=data.get('question_id')
        ))
        return step_response(outcome)

    except Exception as e:
        logger.error(f"Error processing answer: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/next', methods=['POST'])
def next_question():
    """Advance to the next question"""
    try:
        session, error = active_session()
        if error:
            return error
        return step_response(dispatch(session, NextQuestion()))

    except Exception as e:
        logger.error(f"Error moving to next question: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/previous', methods=['POST'])
def previous_question():
    """Go back to the previous question"""
    try:
        session, error = active_session()
        if error:
            return error
        return step_response(dispatch(session, PreviousQuestion()))

    except Exception as e:
        logger.error(f"Error moving to previous question: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/finish', methods=['POST'])
def finish_test():
    """Score the test, render the document and save it per settings"""
    try:
        session, error = active_session()
        if error:
            return error

        outcome = dispatch(session, FinishTest())
        if isinstance(outcome, IllegalCommand):
            return step_response(outcome)

        payload = {
            'success': True,
            'finished': True,
            'result': outcome.to_dict(),
            'saved': False,
            'saved_path': None
        }

        try:
            settings = current_settings()
            saved_path = persist_result(outcome, settings)
        except (OSError, ValueError) as e:
            # Result is kept on the session; /api/save retries the write
            logger.error(f"Error saving result for {session.session_id}: {e}")
            payload['success'] = False
            payload['error'] = f"Result could not be saved: {e}"
            return jsonify(payload), 500

        payload['saved'] = saved_path is not None
        payload['saved_path'] = saved_path
        return jsonify(payload)

    except Exception as e:
        logger.error(f"Error finishing test: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/save', methods=['POST'])
def save_result():
    """Retry saving the completed result without recomputing it"""
    try:
        session, error = active_session()
        if error:
            return error

        if session.result is None:
            return jsonify({
                'success': False,
                'error': 'Test is not complete'
            }), 400

        if current_test['saved_path'] is not None:
            return jsonify({
                'success': True,
                'saved': True,
                'saved_path': current_test['saved_path']
            })

        saved_path = persist_result(session.result, current_settings())
        return jsonify({
            'success': True,
            'saved': saved_path is not None,
            'saved_path': saved_path
        })

    except Exception as e:
        logger.error(f"Error saving result: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/settings', methods=['GET'])
def get_settings():
    """Current settings (camelCase keys)"""
    try:
        return jsonify({
            'success': True,
            'settings': current_settings().to_json()
        })

    except Exception as e:
        logger.error(f"Error loading settings: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/settings', methods=['POST'])
def update_settings():
    """Merge submitted values over current settings and save"""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({
                'success': False,
                'error': 'Settings must be a JSON object'
            }), 400

        merged = current_settings().to_json()
        merged.update(data)

        try:
            settings = ProfilerSettings.from_json(merged)
        except ValueError as e:
            return jsonify({
                'success': False,
                'error': str(e)
            }), 400

        save_settings(settings, app.config['SETTINGS_PATH'])
        return jsonify({
            'success': True,
            'settings': settings.to_json()
        })

    except Exception as e:
        logger.error(f"Error saving settings: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


# Configuration errors are fatal: the catalog is validated when the app
# module loads, under any server
initialize_catalog()


if __name__ == '__main__':
    # Ensure output directory exists
    os.makedirs(app.config['RESULTS_DIR'], exist_ok=True)

    print("\n" + "="*60)
    print("PERMA PROFILER - WEB INTERFACE")
    print("="*60)
    print("\nServer starting...")
    print("Open your browser and go to: http://localhost:5000")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    app.run(debug=True, host='0.0.0.0', port=5000)
