import argparse
import asyncio
from dotenv import load_dotenv

# .env에서 환경 변수 로딩 (app.config import 전에)
load_dotenv()

from app.services.database_service import DatabaseService
from app.services.letter_service import LetterService


async def main(sweep: bool):
    database = DatabaseService()
    try:
        await database.ping()
        #  편지 테이블 생성 (이미 있으면 유지, secret code 유니크 인덱스 포함)
        await database.create_tables()
        print(" Created: letter_TB")

        if sweep:
            removed = await LetterService(database).sweep()
            print(f"🗑️ Deleted expired letters: {removed}")
    finally:
        await database.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="편지 테이블 생성")
    parser.add_argument("--sweep", action="store_true", help="만료된 편지도 함께 삭제")
    args = parser.parse_args()
    asyncio.run(main(args.sweep))
