from expathub_api.exceptions import PlaceNotFoundError
from expathub_api.schemas.place import (
    ListingCard, MapItem, PlaceDetailResponse, PlaceStatsResponse, PlaceWithStats,
)
from expathub_api.schemas.review import ReviewItem
from expathub_shared.models.enums import PlaceType, ReviewSort


def test_list_places_passes_filters(client, listing_service):
    listing_service.get_listing_cards.return_value = [
        ListingCard(id="p1", category="cafe", title="Cafe", rating=4.7, reviews=3,
                    image="img", short_review="Great team"),
    ]

    response = client.get("/api/v1/places/", params={
        "type": "job", "category": "cafe", "location": "전체", "country": "kr", "limit": 10,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["places"][0]["short_review"] == "Great team"
    filters = listing_service.get_listing_cards.await_args.args[0]
    assert filters.type == PlaceType.JOB
    assert filters.country == "kr"
    assert filters.limit == 10


def test_list_places_rejects_unknown_type(client):
    response = client.get("/api/v1/places/", params={"type": "castle"})
    assert response.status_code == 422


def test_map_places(client, listing_service):
    listing_service.get_map_items.return_value = [
        MapItem(id="p1", name="Mart", type=PlaceType.AMENITY, category="mart",
                rating=0, reviews=0, lat=37.4, lng=127.0),
    ]

    response = client.get("/api/v1/places/map")

    assert response.status_code == 200
    assert response.json()["places"][0]["type"] == "amenity"


def test_place_detail(client, listing_service):
    place = PlaceWithStats(id="p1", type=PlaceType.HOUSING, name="Goshiwon", category="room",
                           average_rating=4.0, review_count=1, short_excerpt="quiet")
    listing_service.get_place_detail.return_value = PlaceDetailResponse(
        place=place,
        reviews=[ReviewItem(id="r1", rating=4, content="[장점] quiet", date="2024.12.01")],
    )

    response = client.get("/api/v1/places/p1", params={"rating": 4, "sort": "helpful"})

    assert response.status_code == 200
    assert response.json()["place"]["short_excerpt"] == "quiet"
    listing_service.get_place_detail.assert_awaited_once_with("p1", rating=4, sort=ReviewSort.HELPFUL)


def test_place_detail_not_found(client, listing_service):
    listing_service.get_place_detail.side_effect = PlaceNotFoundError("p9")

    assert client.get("/api/v1/places/p9").status_code == 404


def test_place_stats(client, listing_service):
    listing_service.get_place_stats.return_value = PlaceStatsResponse(
        place_id="p1", name="Cafe", average_rating=0.0, total_reviews=0, short_excerpt="",
        rating_distribution={str(i): 0 for i in range(1, 6)}, recent_reviews=[],
    )

    response = client.get("/api/v1/places/p1/stats")

    assert response.status_code == 200
    assert response.json()["total_reviews"] == 0
