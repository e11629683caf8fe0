from cdn_image_audit.application.app import main

if __name__ == "__main__":
    raise SystemExit(main())
