import json
import os
import sys

import redis

key = os.getenv("CART_STORAGE_KEY", "@RocketShoes:cart")

try:
    redis_client = redis.Redis(
        host=os.getenv("REDIS_HOST", "localhost"),
        port=int(os.getenv("REDIS_PORT", "6379")),
        decode_responses=True,
    )
    # PING fails fast if the server is not reachable
    redis_client.ping()
except redis.RedisError as e:
    print(f"❌ Failed to connect to Redis: {e}")
    print("Make sure Redis is running: docker-compose up redis -d")
    sys.exit(1)

try:
    cart_data = redis_client.get(key)

    if cart_data is None:
        print(f"No cart saved under {key}. Add a product via the API first, e.g.:")
        print("\ncurl -X POST http://localhost:8001/cart/items/1\n")
    else:
        lines = json.loads(cart_data)
        ttl = redis_client.ttl(key)

        print(f"✅ Cart {key} has {len(lines)} lines")
        print(f"⏱️  TTL: {'none' if ttl < 0 else f'{ttl} seconds remaining'}")
        for line in lines:
            product = line["product"]
            print(f"🛒 #{product['id']} {product['title']} x{line['amount']} @ {product['price']}")
        print("-" * 50)

except (redis.RedisError, ValueError, KeyError) as e:
    print(f"❌ Error: {e}")
    sys.exit(1)
