from flask_socketio import emit
from scoreboard import socketio, control_surface
from typing import Dict, Any


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})
    emit('state_update', control_surface().store.get())


def handle_request_state(data=None):
    control = control_surface()
    emit('state_update', control.store.get())
    emit('animation', control.animations.snapshot())


def handle_ping(data):
    emit('pong', data or {})


def broadcast_state(state: Dict[str, Any]) -> None:
    """Store listener: push the post-mutation snapshot to every display."""
    socketio.emit('state_update', state, namespace='/ws')


def broadcast_animation(animations: Dict[str, Any]) -> None:
    socketio.emit('animation', animations, namespace='/ws')


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('request_state', handle_request_state, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('request_state', handle_request_state, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
