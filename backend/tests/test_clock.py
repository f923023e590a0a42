def test_tick_does_nothing_while_stopped(surface):
    assert surface.clock.tick() is None
    assert surface.store.get()['timeRemaining'] == 900


def test_toggle_then_tick_counts_down(surface):
    state = surface.toggle_clock()
    assert state['isClockRunning'] is True
    for _ in range(3):
        state = surface.clock.tick()
    assert state['timeRemaining'] == 897
    state = surface.toggle_clock()
    assert state['isClockRunning'] is False
    assert surface.clock.tick() is None
    assert surface.store.get()['timeRemaining'] == 897


def test_clock_stops_itself_at_zero(surface):
    surface.store.update({'timeRemaining': 2})
    surface.toggle_clock()
    state = surface.clock.tick()
    assert (state['timeRemaining'], state['isClockRunning']) == (1, True)
    state = surface.clock.tick()
    assert (state['timeRemaining'], state['isClockRunning']) == (0, False)
    assert surface.clock.tick() is None


def test_clock_will_not_start_at_zero(surface):
    surface.store.update({'timeRemaining': 0})
    assert surface.toggle_clock()['isClockRunning'] is False


def test_patch_can_start_the_clock(client, surface):
    client.patch('/api/game-state', json={'isClockRunning': True})
    assert surface.clock.tick()['timeRemaining'] == 899


def test_reset_and_adjust(surface):
    surface.toggle_clock()
    surface.clock.tick()
    state = surface.reset_clock()
    assert (state['timeRemaining'], state['isClockRunning']) == (900, False)
    assert surface.adjust_time(-60)['timeRemaining'] == 840
    assert surface.adjust_time(-10000)['timeRemaining'] == 0
    assert surface.adjust_time(30)['timeRemaining'] == 30


def test_clock_endpoints(client):
    res = client.post('/api/control/clock/toggle')
    assert res.get_json()['state']['isClockRunning'] is True
    res = client.post('/api/control/clock/adjust', json={'seconds': -100})
    assert res.get_json()['state']['timeRemaining'] == 800
    res = client.post('/api/control/clock/reset')
    state = res.get_json()['state']
    assert (state['timeRemaining'], state['isClockRunning']) == (900, False)


def test_run_loop_ticks_until_shutdown(surface):
    surface.toggle_clock()
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 3:
            surface.clock.shutdown()

    surface.clock.run(fake_sleep)
    assert sleeps == [1.0, 1.0, 1.0]
    # the third sleep ends in shutdown, so only two ticks land
    assert surface.store.get()['timeRemaining'] == 898


def test_run_loop_survives_bad_stored_time(surface):
    surface.store.update({'isClockRunning': True, 'timeRemaining': 'soon'})
    calls = []

    def fake_sleep(seconds):
        calls.append(seconds)
        if len(calls) == 2:
            surface.clock.shutdown()

    surface.clock.run(fake_sleep)
    # unparseable time counts as zero, which stops the clock
    state = surface.store.get()
    assert (state['timeRemaining'], state['isClockRunning']) == (0, False)
