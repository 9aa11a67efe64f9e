from pathfinder.main import app as application

# Hosting platforms import `application`; locally run it with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pathfinder.main:app", host="0.0.0.0", port=8000)
