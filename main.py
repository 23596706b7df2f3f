from app import CaptionStage
import config, web_remote

def main():
    stage = CaptionStage()
    web_remote.start(stage, getattr(config, "WEB_PORT", 8080))
    stage.run()

if __name__ == "__main__":
    main()
