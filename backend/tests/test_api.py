from scoreboard.schema import DEFAULT_GAME_STATE


def test_get_game_state_returns_defaults(client):
    res = client.get('/api/game-state')
    assert res.status_code == 200
    state = res.get_json()
    assert state == DEFAULT_GAME_STATE
    assert state['homeTeam']['name'] == 'Chiefs'
    assert state['awayTeam']['name'] == 'Raiders'


def test_patch_merges_top_level_fields(client):
    res = client.patch('/api/game-state', json={'quarter': 3, 'possession': 'home'})
    assert res.status_code == 200
    state = res.get_json()
    assert state['quarter'] == 3
    assert state['possession'] == 'home'
    # untouched fields survive
    assert state['down'] == 1
    assert state['timeRemaining'] == 900
    assert client.get('/api/game-state').get_json()['quarter'] == 3


def test_patch_replaces_nested_team_wholesale(client):
    res = client.patch('/api/game-state', json={'homeTeam': {'name': 'Bears', 'score': 7}})
    state = res.get_json()
    assert state['homeTeam'] == {'name': 'Bears', 'score': 7}
    assert state['awayTeam']['name'] == 'Raiders'


def test_patch_stores_out_of_range_values_verbatim(client):
    res = client.patch('/api/game-state', json={'yardsToGo': 150})
    assert res.status_code == 200
    assert res.get_json()['yardsToGo'] == 150
    assert client.get('/api/game-state').get_json()['yardsToGo'] == 150


def test_patch_rejects_non_object_body(client):
    res = client.patch('/api/game-state', json=[1, 2, 3])
    assert res.status_code == 400
    res = client.patch('/api/game-state', data='not json', content_type='application/json')
    assert res.status_code == 400


def test_reset_restores_defaults(client):
    client.patch('/api/game-state', json={
        'quarter': 'OT',
        'timeRemaining': 12,
        'down': 4,
        'yardsToGo': 2,
        'fieldPosition': 97,
        'possession': 'away',
        'activeFlag': {'team': 'home', 'type': 'Holding'},
    })
    res = client.post('/api/game-state/reset', json={'ignored': True})
    assert res.status_code == 200
    state = res.get_json()
    assert state == DEFAULT_GAME_STATE
    assert state['quarter'] == 1
    assert state['timeRemaining'] == 900
    assert state['down'] == 1
    assert state['yardsToGo'] == 10
    assert state['fieldPosition'] == 50
    assert state['possession'] is None
    assert state['activeFlag'] is None


def test_reset_without_body(client):
    res = client.post('/api/game-state/reset')
    assert res.status_code == 200
    assert res.get_json()['quarter'] == 1


def test_get_failure_maps_to_server_error(client, surface, monkeypatch):
    def boom():
        raise RuntimeError('store unavailable')

    monkeypatch.setattr(surface.store, 'get', boom)
    res = client.get('/api/game-state')
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Failed to get game state'}


def test_update_failure_maps_to_server_error(client, surface, monkeypatch):
    def boom(patch):
        raise RuntimeError('store unavailable')

    monkeypatch.setattr(surface.store, 'update', boom)
    res = client.patch('/api/game-state', json={'down': 2})
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Failed to update game state'}


def test_reset_failure_maps_to_server_error(client, surface, monkeypatch):
    def boom():
        raise RuntimeError('store unavailable')

    monkeypatch.setattr(surface.store, 'reset', boom)
    res = client.post('/api/game-state/reset')
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Failed to reset game state'}


def test_strict_mode_rejects_schema_violations(strict_client):
    res = strict_client.patch('/api/game-state', json={'yardsToGo': 150})
    assert res.status_code == 400
    body = res.get_json()
    assert body['error'] == 'Invalid game state update'
    assert body['details']['path'] == 'yardsToGo'
    assert strict_client.get('/api/game-state').get_json()['yardsToGo'] == 10


def test_strict_mode_rejects_unknown_fields_and_partial_teams(strict_client):
    assert strict_client.patch('/api/game-state', json={'weather': 'snow'}).status_code == 400
    assert strict_client.patch('/api/game-state', json={'homeTeam': {'name': 'Bears'}}).status_code == 400


def test_strict_mode_accepts_valid_patch(strict_client):
    res = strict_client.patch('/api/game-state', json={'down': 3, 'yardsToGo': 7, 'quarter': 'OT'})
    assert res.status_code == 200
    state = res.get_json()
    assert (state['down'], state['yardsToGo'], state['quarter']) == (3, 7, 'OT')


def test_no_cli_reset_outside_the_serving_process(flask_app):
    # state lives in the serving process; resets go through the HTTP API
    result = flask_app.test_cli_runner().invoke(args=['reset-state'])
    assert result.exit_code != 0
    assert 'has been reset' not in result.output
