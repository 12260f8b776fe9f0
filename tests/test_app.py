"""
Test Flask web interface - JSON API over ProfilerSession

Run with: pytest tests/test_app.py -v
"""

import importlib
import json

import pytest

import app as web


@pytest.fixture
def client(tmp_path):
    web.app.config['TESTING'] = True
    web.app.config['SETTINGS_PATH'] = str(tmp_path / "settings.json")
    web.app.config['RESULTS_DIR'] = str(tmp_path / "results")
    web.reset_state()

    with web.app.test_client() as client:
        yield client

    web.reset_state()


def write_settings(tmp_path, **values):
    (tmp_path / "settings.json").write_text(json.dumps(values))


def walk_to_last(client, score=None):
    for _ in range(22):
        if score is not None:
            client.post('/api/answer', json={'score': score})
        client.post('/api/next')
    if score is not None:
        client.post('/api/answer', json={'score': score})


def test_index_page(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b"PERMA Profiler" in response.data


def test_index_hides_launcher_when_disabled(client, tmp_path):
    write_settings(tmp_path, showRibbonIcon=False)
    response = client.get('/')
    assert b'id="launcher"' not in response.data
    assert b'id="start"' in response.data


def test_start(client):
    data = client.post('/api/start').get_json()

    assert data['success'] is True
    assert data['session_id']
    step = data['step']
    assert step['question_id'] == "A1"
    assert step['progress'] == "Question 1 of 23"
    assert step['scale']['description'] == "0 = Never, 10 = Always"
    assert step['can_go_back'] is False
    assert step['can_finish'] is False


def test_requires_active_test(client):
    for url in ('/api/answer', '/api/next', '/api/previous', '/api/finish', '/api/save'):
        response = client.post(url)
        assert response.status_code == 400
        assert response.get_json()['error'] == "No active test"


def test_answer_and_navigate(client):
    client.post('/api/start')

    data = client.post('/api/answer', json={'score': 8, 'reflection': 'Good'}).get_json()
    assert data['step']['score'] == 8
    assert data['step']['reflection'] == 'Good'

    data = client.post('/api/next').get_json()
    assert data['step']['question_id'] == "E1"
    assert data['step']['can_go_back'] is True

    data = client.post('/api/previous').get_json()
    assert data['step']['score'] == 8


def test_answer_handled_after_next_lands_on_its_question(client):
    """A reflection for question 1 handled after /api/next stays on question 1"""
    client.post('/api/start')
    client.post('/api/next')

    data = client.post('/api/answer', json={
        'question_id': 'A1',
        'reflection': 'about question 1'
    }).get_json()

    assert data['success'] is True
    assert data['step']['question_id'] == "E1"
    assert data['step']['reflection'] == ""

    store = web.current_test['session'].answer_store
    assert store.get("A1").reflection == "about question 1"
    assert store.get("E1").reflection == ""


def test_answer_for_unreached_question_rejected(client):
    client.post('/api/start')
    response = client.post('/api/answer', json={'question_id': 'hap', 'score': 5})

    assert response.status_code == 400
    assert "not been reached" in response.get_json()['error']


def test_invalid_score_rejected(client):
    client.post('/api/start')
    response = client.post('/api/answer', json={'score': 15})
    assert response.status_code == 400
    assert "outside scale" in response.get_json()['error']

    response = client.post('/api/answer', json={'score': "7"})
    assert response.status_code == 400


def test_finish_before_last_rejected(client):
    client.post('/api/start')
    response = client.post('/api/finish')
    assert response.status_code == 400
    assert response.get_json()['command'] == "FinishTest"


def test_finish_saves_result(client, tmp_path):
    client.post('/api/start')
    walk_to_last(client, score=6)

    data = client.post('/api/finish').get_json()

    assert data['success'] is True
    assert data['finished'] is True
    assert data['saved'] is True
    assert data['result']['scores']['PERMA'] == 6.0
    assert len(data['result']['interpretations']) == 9

    saved = list((tmp_path / "results").glob("PERMA-Results-*.md"))
    assert len(saved) == 1
    assert saved[0].read_text() == data['result']['document']


def test_finish_without_file_creation(client, tmp_path):
    write_settings(tmp_path, createResultFile=False)
    client.post('/api/start')
    walk_to_last(client)

    data = client.post('/api/finish').get_json()

    assert data['success'] is True
    assert data['saved'] is False
    assert data['result']['document']
    assert not (tmp_path / "results").exists()


def test_save_failure_keeps_result_for_retry(client, tmp_path):
    blocker = tmp_path / "results"
    blocker.write_text("not a directory")

    client.post('/api/start')
    walk_to_last(client, score=3)

    response = client.post('/api/finish')
    assert response.status_code == 500
    data = response.get_json()
    assert data['saved'] is False
    assert "could not be saved" in data['error']
    document = data['result']['document']

    blocker.unlink()
    data = client.post('/api/save').get_json()
    assert data['success'] is True
    assert data['saved'] is True

    saved = list((tmp_path / "results").glob("*.md"))
    assert saved[0].read_text() == document

    # Already saved: no second write
    client.post('/api/save')
    assert saved[0].read_text() == document


def test_save_before_finish_rejected(client):
    client.post('/api/start')
    response = client.post('/api/save')
    assert response.status_code == 400


def test_settings_roundtrip(client, tmp_path):
    data = client.get('/api/settings').get_json()
    assert data['settings']['fileNamingConvention'] == "PERMA-Results-{{date}}"

    data = client.post('/api/settings', json={'resultTemplate': 'Only {{score_P}}'}).get_json()
    assert data['success'] is True
    assert data['settings']['resultTemplate'] == 'Only {{score_P}}'

    stored = json.loads((tmp_path / "settings.json").read_text())
    assert stored['resultTemplate'] == 'Only {{score_P}}'


def test_settings_rejects_bad_values(client):
    response = client.post('/api/settings', json={'createResultFile': 'no'})
    assert response.status_code == 400

    response = client.post('/api/settings', json=["not", "an", "object"])
    assert response.status_code == 400


def test_new_session_uses_saved_template(client):
    client.post('/api/settings', json={'resultTemplate': 'P={{score_P}}'})
    client.post('/api/start')
    walk_to_last(client, score=10)

    data = client.post('/api/finish').get_json()
    assert data['result']['document'].startswith("P=10.00")


def test_bad_catalog_stops_app_loading(monkeypatch, tmp_path):
    """The catalog is validated when the app module loads, not on first request"""
    bad = tmp_path / "questions.json"
    bad.write_text(json.dumps({'questions': []}))
    monkeypatch.setenv('PERMA_QUESTIONS_PATH', str(bad))

    try:
        with pytest.raises(ValueError):
            importlib.reload(web)
    finally:
        monkeypatch.delenv('PERMA_QUESTIONS_PATH')
        importlib.reload(web)

    assert web.catalog is not None
    assert len(web.catalog) == 23
