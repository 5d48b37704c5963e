from morning_mail.lifecycle import run

if __name__ == "__main__":
    run()
