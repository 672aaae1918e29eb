from millionaire import create_app

app = create_app()

if __name__ == '__main__':
    # `python run.py db-reset` behaves like `flask --app run db-reset`
    app.cli()
