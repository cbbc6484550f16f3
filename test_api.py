"""
Tests for the Flask calculator API
"""
import pytest

from api import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app(db_path=str(tmp_path / "api.db"), max_sessions=3)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def new_session(client):
    resp = client.post('/api/sessions')
    assert resp.status_code == 201
    return resp.get_json()['data']['session_id']


def act(client, session_id, action, param=None):
    body = {'action': action}
    if param is not None:
        body['param'] = param
    return client.post(f'/api/sessions/{session_id}/actions', json=body)


def test_new_session_starts_at_zero(client):
    resp = client.post('/api/sessions')
    data = resp.get_json()['data']
    assert data['live'] == '0'
    assert data['history'] == ''
    assert data['mode'] == 'composing'


def test_actions_evaluate_and_record(client):
    sid = new_session(client)
    act(client, sid, 'digit', '9')
    act(client, sid, 'operator', '×')
    act(client, sid, 'digit', '9')
    resp = act(client, sid, 'equals')

    body = resp.get_json()
    assert body['success'] is True
    assert body['data']['live'] == '81'
    assert body['data']['history'] == '9 × 9 ='
    assert body['data']['mode'] == 'result_shown'

    tape = client.get(f'/api/calculations?session_id={sid}').get_json()
    assert tape['count'] == 1
    assert tape['data'][0]['expression'] == '9 × 9 ='
    assert tape['data'][0]['result'] == '81'


def test_get_session(client):
    sid = new_session(client)
    act(client, sid, 'digit', '4')
    data = client.get(f'/api/sessions/{sid}').get_json()['data']
    assert data['live'] == '4'
    assert data['session_id'] == sid


def test_unknown_session_is_404(client):
    assert client.get('/api/sessions/nope').status_code == 404
    assert act(client, 'nope', 'clear').status_code == 404
    assert client.delete('/api/sessions/nope').status_code == 404


@pytest.mark.parametrize('body', [
    {},
    {'action': 'sqrt'},
    {'action': 'digit'},
    {'action': 'digit', 'param': 'z'},
    {'action': 'operator', 'param': '^'},
    {'action': 'operator', 'param': ['+']},
    ['digit', '5'],
    'digit',
])
def test_bad_actions_are_400(client, body):
    sid = new_session(client)
    resp = client.post(f'/api/sessions/{sid}/actions', json=body)
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False


def test_delete_session(client):
    sid = new_session(client)
    assert client.delete(f'/api/sessions/{sid}').status_code == 200
    assert client.get(f'/api/sessions/{sid}').status_code == 404


def test_oldest_session_evicted(client, app):
    first = new_session(client)
    for _ in range(3):
        new_session(client)
    assert len(app.config['SESSIONS']) == 3
    assert client.get(f'/api/sessions/{first}').status_code == 404


def test_clear_calculations(client):
    sid = new_session(client)
    act(client, sid, 'digit', '2')
    act(client, sid, 'equals')
    assert client.get('/api/calculations').get_json()['count'] == 1

    assert client.delete('/api/calculations').status_code == 200
    assert client.get('/api/calculations').get_json()['count'] == 0


def test_bad_limit_is_400(client):
    assert client.get('/api/calculations?limit=abc').status_code == 400


def test_api_info_page(client):
    resp = client.get('/api')
    assert resp.status_code == 200
    assert b'Royal Calculator API' in resp.data


def test_clear_calculations_for_one_session(client):
    first, second = new_session(client), new_session(client)
    for sid in (first, second):
        act(client, sid, 'digit', '3')
        act(client, sid, 'equals')

    resp = client.delete(f'/api/calculations?session_id={first}')
    assert resp.status_code == 200
    assert resp.get_json()['data']['count'] == 1
    assert client.get(f'/api/calculations?session_id={first}').get_json()['count'] == 0
    assert client.get(f'/api/calculations?session_id={second}').get_json()['count'] == 1


def test_repeated_equals_records_once(client):
    sid = new_session(client)
    act(client, sid, 'digit', '9')
    act(client, sid, 'operator', '×')
    act(client, sid, 'digit', '9')
    act(client, sid, 'equals')
    act(client, sid, 'equals')

    tape = client.get(f'/api/calculations?session_id={sid}').get_json()
    assert tape['count'] == 1
    assert tape['data'][0]['expression'] == '9 × 9 ='
