from tablefeedback import create_app

app = create_app()
