from plansync import create_app
from flask_migrate import upgrade

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second scheduler in the child process
    app.run(use_reloader=False)


@app.cli.command()
def deploy():
    """Run deployment tasks."""
    # migrate database to latest revision
    upgrade()


@app.cli.command()
def sync():
    """Run one plans sync in the foreground."""
    result = app.extensions["sync_orchestrator"].sync()
    if result is None:
        print("A sync is already in progress.")
    else:
        print(f"Synced {result.plans_processed} plans in {result.duration_ms}ms.")
