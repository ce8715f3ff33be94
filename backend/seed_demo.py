import asyncio
import httpx
import argparse
import random
from colorama import init, Fore

from tiktik.services.trending import trending

init()

DEMO_PASSWORD = "demo-password"

DEMO_VIDEOS = [
    ("Sunset timelapse", "travel", "https://cdn.example.com/sunset.mp4"),
    ("Five minute pasta", "food", "https://cdn.example.com/pasta.mp4"),
    ("Skateboard tricks", "sports", "https://cdn.example.com/skate.mp4"),
    ("Lo-fi beats to code to", "music", "https://cdn.example.com/lofi.mp4"),
    ("Cat vs cucumber", "comedy", "https://cdn.example.com/cat.mp4"),
]


async def _register(client: httpx.AsyncClient, name: str, email: str) -> dict:
    res = await client.post("/auth/register", json={"email": email, "password": DEMO_PASSWORD, "name": name})
    if res.status_code == 400:
        res = await client.post("/auth/login", json={"email": email, "password": DEMO_PASSWORD})
    res.raise_for_status()
    return res.json()


async def seed_demo(viewers: int, base_url: str):
    """
    Fill a running TikTik server with a creator, a few viewers, videos, likes and views.
    """
    print(f"\n{Fore.CYAN}🚀 Seeding TikTik demo data at {base_url}...{Fore.RESET}")

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        try:
            creator = await _register(client, "Demo Creator", "creator@tiktik.demo")
            creator_headers = {"Authorization": f"Bearer {creator['token']}"}
            print(f"{Fore.GREEN}Creator ready: user {creator['user']['id']}{Fore.RESET}")

            video_ids = []
            for title, category, url in DEMO_VIDEOS:
                res = await client.post(
                    "/videos",
                    json={"title": title, "category": category, "videoUrl": url},
                    headers=creator_headers,
                )
                res.raise_for_status()
                video_ids.append(res.json()["video"]["id"])
            print(f"Created {len(video_ids)} videos")

            for i in range(viewers):
                viewer = await _register(client, f"Viewer {i + 1}", f"viewer{i + 1}@tiktik.demo")
                headers = {"Authorization": f"Bearer {viewer['token']}"}
                await client.post("/subscriptions", json={"channelId": creator["user"]["id"]}, headers=headers)
                for video_id in random.sample(video_ids, k=random.randint(1, len(video_ids))):
                    await client.post(
                        f"/videos/{video_id}/view",
                        json={"userId": viewer["user"]["id"], "watchTime": random.randint(5, 120)},
                    )
                    if random.random() < 0.6:
                        await client.post(f"/videos/{video_id}/like", json={"type": "like"}, headers=headers)
            print(f"{Fore.GREEN}Success! {viewers} viewers subscribed, watched and liked{Fore.RESET}")

            res = await client.get("/videos")
            res.raise_for_status()
            print(f"\n{Fore.CYAN}🔥 Trending{Fore.RESET}")
            for rank, video in enumerate(trending(res.json()["videos"]), start=1):
                print(f"  {rank:>2}. {video['title']:<28} {video['views']:>4} views  {video['likes']:>3} likes")

        except httpx.HTTPError as e:
            print(f"{Fore.RED}An error occurred: {str(e)}{Fore.RESET}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a TikTik server with demo data")
    parser.add_argument("--viewers", type=int, default=5, help="Number of viewer accounts to create")
    parser.add_argument("--port", type=int, default=8000, help="Backend server port")
    parser.add_argument("--host", type=str, default="localhost", help="Backend server host")

    args = parser.parse_args()
    base_url = f"http://{args.host}:{args.port}"

    asyncio.run(seed_demo(args.viewers, base_url))
