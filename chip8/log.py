# make it true if you want the logs (F1 toggles it in the window)
logs_on = False


def log(*args):
    if logs_on:
        print(*args)


def toggle_logs():
    global logs_on
    logs_on = not logs_on
    return logs_on
