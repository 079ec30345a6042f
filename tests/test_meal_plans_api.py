"""
Integration tests for the meal plan endpoints.

Meal Plan Flow:
===============
1. User creates recipes
2. User creates a plan for a week starting on Monday, assigning recipes to dates
3. Plans are read back with their recipes resolved
4. The grocery list endpoint sums the planned ingredients
"""

from datetime import date

from bson import ObjectId

from test_fixtures import WEEK_START, create_plan, create_recipe, this_monday


def _meal(recipe, meal_type="dinner"):
    return {"recipe": recipe["id"], "type": meal_type}


# =============================================================================
# CREATE
# =============================================================================


def test_create_plan_resolves_recipes(client, auth_headers):
    pasta = create_recipe(client, auth_headers)

    response = create_plan(
        client,
        auth_headers,
        meals={"2024-01-03": [_meal(pasta)], "2024-01-01": [_meal(pasta, "lunch")]},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["weekStartDate"] == "2024-01-01"
    assert body["weekEndDate"] == "2024-01-07"
    assert list(body["meals"]) == ["2024-01-01", "2024-01-03"]
    meal = body["meals"]["2024-01-03"][0]
    assert meal["recipeId"] == pasta["id"]
    assert meal["type"] == "dinner"
    assert meal["recipe"]["name"] == pasta["name"]


def test_create_empty_plan(client, auth_headers):
    response = create_plan(client, auth_headers)

    assert response.status_code == 201
    assert response.json()["meals"] == {}


def test_week_must_start_on_monday(client, auth_headers):
    response = create_plan(client, auth_headers, week_start=date(2024, 1, 2))

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "weekStartDate", "message": "Week start date must be a Monday"}
    ]


def test_meal_date_outside_week_is_rejected(client, auth_headers):
    pasta = create_recipe(client, auth_headers)

    response = create_plan(client, auth_headers, meals={"2024-01-08": [_meal(pasta)]})

    assert response.status_code == 400
    assert response.json()["errors"][0]["message"] == "Date outside week range"


def test_invalid_meal_type_is_rejected(client, auth_headers):
    pasta = create_recipe(client, auth_headers)

    response = create_plan(
        client, auth_headers, meals={"2024-01-02": [_meal(pasta, "supper")]}
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "meals.2024-01-02[0].type"


def test_foreign_recipe_is_rejected(client, auth_headers, other_auth_headers):
    theirs = create_recipe(client, other_auth_headers)

    response = create_plan(client, auth_headers, meals={"2024-01-02": [_meal(theirs)]})

    assert response.status_code == 400
    assert response.json()["message"] == "One or more recipes are invalid"


def test_unknown_recipe_is_rejected(client, auth_headers):
    response = create_plan(
        client,
        auth_headers,
        meals={"2024-01-02": [{"recipe": str(ObjectId()), "type": "lunch"}]},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "One or more recipes are invalid"


def test_second_plan_for_same_week_is_rejected(client, auth_headers):
    assert create_plan(client, auth_headers).status_code == 201

    response = create_plan(client, auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "A meal plan already exists for this week"


def test_same_week_for_different_users_is_allowed(client, auth_headers, other_auth_headers):
    assert create_plan(client, auth_headers).status_code == 201
    assert create_plan(client, other_auth_headers).status_code == 201


# =============================================================================
# READ
# =============================================================================


def test_list_plans_newest_week_first(client, auth_headers, other_auth_headers):
    for week in (date(2024, 1, 8), date(2024, 1, 1), date(2024, 1, 15)):
        assert create_plan(client, auth_headers, week_start=week).status_code == 201
    create_plan(client, other_auth_headers, week_start=date(2024, 1, 22))

    response = client.get("/api/meal-plans", headers=auth_headers)

    assert response.status_code == 200
    assert [p["weekStartDate"] for p in response.json()] == [
        "2024-01-15",
        "2024-01-08",
        "2024-01-01",
    ]


def test_get_plan(client, auth_headers):
    pasta = create_recipe(client, auth_headers)
    created = create_plan(client, auth_headers, meals={"2024-01-05": [_meal(pasta)]}).json()

    response = client.get(f"/api/meal-plans/{created['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["meals"]["2024-01-05"][0]["recipe"]["id"] == pasta["id"]


def test_get_foreign_plan_is_not_found(client, auth_headers, other_auth_headers):
    theirs = create_plan(client, other_auth_headers).json()

    response = client.get(f"/api/meal-plans/{theirs['id']}", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Meal plan not found"


def test_malformed_plan_id_is_a_bad_request(client, auth_headers):
    response = client.get("/api/meal-plans/12345", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "id", "message": "Invalid meal plan ID"}]


def test_current_plan(client, auth_headers):
    monday = this_monday()
    created = create_plan(client, auth_headers, week_start=monday).json()

    response = client.get("/api/meal-plans/current", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_current_plan_missing(client, auth_headers):
    create_plan(client, auth_headers, week_start=WEEK_START)

    response = client.get("/api/meal-plans/current", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "No meal plan for the current week"


# =============================================================================
# UPDATE / DELETE
# =============================================================================


def test_update_meals(client, auth_headers):
    pasta = create_recipe(client, auth_headers)
    salad = create_recipe(client, auth_headers, name="Greek Salad", category="lunch")
    created = create_plan(client, auth_headers, meals={"2024-01-01": [_meal(pasta)]}).json()

    response = client.put(
        f"/api/meal-plans/{created['id']}",
        json={"meals": {"2024-01-02": [_meal(salad, "lunch")]}},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert list(body["meals"]) == ["2024-01-02"]
    assert body["meals"]["2024-01-02"][0]["recipe"]["name"] == "Greek Salad"
    assert body["weekStartDate"] == "2024-01-01"


def test_update_week_revalidates_existing_meals(client, auth_headers):
    pasta = create_recipe(client, auth_headers)
    created = create_plan(client, auth_headers, meals={"2024-01-03": [_meal(pasta)]}).json()

    response = client.put(
        f"/api/meal-plans/{created['id']}",
        json={"weekStartDate": "2024-01-08"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["message"] == "Date outside week range"


def test_update_into_taken_week_is_rejected(client, auth_headers):
    create_plan(client, auth_headers, week_start=date(2024, 1, 8))
    created = create_plan(client, auth_headers, week_start=WEEK_START).json()

    response = client.put(
        f"/api/meal-plans/{created['id']}",
        json={"weekStartDate": "2024-01-08"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "A meal plan already exists for this week"


def test_update_with_foreign_recipe_is_rejected(client, auth_headers, other_auth_headers):
    theirs = create_recipe(client, other_auth_headers)
    created = create_plan(client, auth_headers).json()

    response = client.put(
        f"/api/meal-plans/{created['id']}",
        json={"meals": {"2024-01-02": [_meal(theirs)]}},
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_delete_plan(client, auth_headers):
    created = create_plan(client, auth_headers).json()

    response = client.delete(f"/api/meal-plans/{created['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Meal plan deleted successfully"
    assert client.get(f"/api/meal-plans/{created['id']}", headers=auth_headers).status_code == 404
    # the week is free again
    assert create_plan(client, auth_headers).status_code == 201


def test_delete_foreign_plan_is_not_found(client, auth_headers, other_auth_headers):
    theirs = create_plan(client, other_auth_headers).json()

    response = client.delete(f"/api/meal-plans/{theirs['id']}", headers=auth_headers)

    assert response.status_code == 404


# =============================================================================
# GROCERY LIST
# =============================================================================


def test_grocery_list_sums_planned_ingredients(client, auth_headers):
    a = create_recipe(
        client, auth_headers, name="Flatbread",
        ingredients=[{"name": "Flour", "quantity": 200, "unit": "g"}],
    )
    b = create_recipe(
        client, auth_headers, name="Pancakes",
        ingredients=[
            {"name": "flour", "quantity": 100, "unit": "g"},
            {"name": "egg", "quantity": 2, "unit": "pcs"},
        ],
    )
    plan = create_plan(
        client,
        auth_headers,
        meals={"2024-01-01": [_meal(a, "lunch")], "2024-01-02": [_meal(b, "breakfast")]},
    ).json()

    response = client.get(f"/api/meal-plans/{plan['id']}/grocery-list", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == [
        {"name": "egg", "quantity": 2, "unit": "pcs"},
        {"name": "flour", "quantity": 300, "unit": "g"},
    ]


def test_deleted_recipe_dangles_in_plan_and_grocery_list(client, auth_headers):
    keep = create_recipe(
        client, auth_headers, name="Porridge",
        ingredients=[{"name": "oats", "quantity": 50, "unit": "g"}],
    )
    gone = create_recipe(
        client, auth_headers, name="Omelette",
        ingredients=[{"name": "egg", "quantity": 3, "unit": "pcs"}],
    )
    plan = create_plan(
        client,
        auth_headers,
        meals={"2024-01-04": [_meal(keep, "breakfast"), _meal(gone, "dinner")]},
    ).json()
    client.delete(f"/api/recipes/{gone['id']}", headers=auth_headers)

    fetched = client.get(f"/api/meal-plans/{plan['id']}", headers=auth_headers).json()
    meals = fetched["meals"]["2024-01-04"]
    assert meals[1]["recipeId"] == gone["id"]
    assert meals[1]["recipe"] is None

    groceries = client.get(
        f"/api/meal-plans/{plan['id']}/grocery-list", headers=auth_headers
    ).json()
    assert groceries == [{"name": "oats", "quantity": 50, "unit": "g"}]


def test_grocery_list_for_foreign_plan_is_not_found(client, auth_headers, other_auth_headers):
    theirs = create_plan(client, other_auth_headers).json()

    response = client.get(f"/api/meal-plans/{theirs['id']}/grocery-list", headers=auth_headers)

    assert response.status_code == 404
