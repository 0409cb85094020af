from fastapi import APIRouter

from models import MenuItem

menu_router = APIRouter(
    tags=["Menu"]
)

MENU = [
    MenuItem(name="Margherita", description="San Marzano tomato, fior di latte, basil", price="£12", tag="V"),
    MenuItem(name="Pepperoni", description="Tomato, mozzarella, Italian pepperoni", price="£14"),
    MenuItem(name="Quattro Stagioni", description="Tomato, mozzarella, mushrooms, ham, artichokes, olives", price="£16"),
    MenuItem(name="Prosciutto & Rocket", description="Mozzarella, Parma ham, rocket, parmesan, balsamic", price="£17"),
    MenuItem(name="Goat's Cheese & Onion", description="Tomato, goat's cheese, caramelized onion, thyme, honey", price="£15", tag="V"),
    MenuItem(name="Spicy Chorizo", description="Tomato, mozzarella, chorizo, red peppers, chilli", price="£16"),
    MenuItem(name="Mushroom & Truffle", description="Garlic oil, mixed mushrooms, mozzarella, truffle oil", price="£18", tag="V"),
    MenuItem(name="Vegan Mediterranean", description="Tomato, vegan cheese, roasted vegetables, olives", price="£14", tag="VE"),
]

@menu_router.get("/menu", response_model=list[MenuItem], tags=["Menu"])
def get_menu():
    """
    Returns the pizza menu.

    Returns:
        list: The pizzas with description, price and dietary tag.
    """
    return MENU
