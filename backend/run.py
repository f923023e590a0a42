from scoreboard import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so display views get live pushes in dev
    socketio.run(app, debug=True, use_reloader=False)
