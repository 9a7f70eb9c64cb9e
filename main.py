from dotenv import load_dotenv
import uvicorn

load_dotenv()

if __name__ == '__main__':
    from config import API_HOST, API_PORT

    uvicorn.run("app:app",
                app_dir="backend",
                host=API_HOST,
                port=API_PORT,
                reload=True)
